"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from taskdesk.models.tasks import Task

__all__ = ["Task"]
