"""TaskDesk personal task-management API."""
