"""Turn free-text brain dumps into tasks via the text-generation collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from taskdesk.core.logging import get_logger
from taskdesk.core.time import utcnow
from taskdesk.models.tasks import TASK_BUCKETS
from taskdesk.schemas.tasks import TaskCreate
from taskdesk.services.llm import LLMError
from taskdesk.services.scoring import clamp_priority, parse_due_date
from taskdesk.services.tasks import create_task

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskdesk.models.tasks import Task
    from taskdesk.schemas.assistant import BrainDumpDefaults
    from taskdesk.services.llm import TextGenerationClient

logger = get_logger(__name__)

BRAIN_DUMP_SYSTEM_PROMPT = """You turn a person's unstructured brain dump into a list of discrete, actionable tasks.

## Rules

1. One task per distinct action. Do not merge unrelated actions.
2. Titles are short imperatives ("Call the dentist"). Every task must have a title.
3. Put supporting detail in the description.
4. Only set a due_date when the text states or clearly implies one. Use ISO 8601 ("2025-01-31" or "2025-01-31T17:00:00Z"). Today is {today}.
5. bucket is one of: today, this_week, later, backlog. Omit it when unsure (default: {bucket}).
6. priority is an integer from 1 (highest) to 5 (lowest). Omit it when unsure (default: {priority}).
7. area is a short category label such as "home", "work", or "finance". Omit it when unsure (default: "{area}").

## Output Format

Respond with a JSON object and nothing else:
```json
{{
  "tasks": [
    {{
      "title": "<required>",
      "description": "<optional>",
      "bucket": "<optional>",
      "priority": <optional 1-5>,
      "due_date": "<optional ISO 8601>",
      "area": "<optional>"
    }}
  ]
}}
```"""


@dataclass
class BrainDumpResult:
    """Tasks created from one brain dump and how many drafts were dropped."""

    tasks: list[Task] = field(default_factory=list)
    skipped: int = 0


def build_system_prompt(defaults: BrainDumpDefaults, *, today: str) -> str:
    return BRAIN_DUMP_SYSTEM_PROMPT.format(
        today=today,
        bucket=defaults.bucket,
        priority=defaults.priority,
        area=defaults.area,
    )


def _optional_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def draft_to_task_create(draft: object, defaults: BrainDumpDefaults) -> TaskCreate | None:
    """Normalize one draft; returns None when it has no usable title.

    Fields the model got wrong fall back to ``defaults`` rather than failing
    the whole batch.
    """
    if not isinstance(draft, dict):
        return None
    title = draft.get("title")
    if not isinstance(title, str) or not title.strip():
        return None

    bucket = draft.get("bucket")
    if not isinstance(bucket, str) or bucket.strip().lower() not in TASK_BUCKETS:
        bucket = defaults.bucket

    try:
        due_date = parse_due_date(draft.get("due_date"))
    except ValueError:
        logger.debug("brain_dump.draft.invalid_due_date title=%s", title)
        due_date = None

    area = _optional_text(draft.get("area")) or defaults.area

    return TaskCreate(
        title=title,
        description=_optional_text(draft.get("description")),
        area=area,
        status=defaults.status,
        bucket=bucket,
        priority=clamp_priority(draft.get("priority"), default=defaults.priority),
        due_date=due_date,
    )


def _extract_drafts(payload: Any) -> list[object]:
    """Accept ``{"tasks": [...]}`` or a bare array of drafts."""
    drafts = payload.get("tasks") if isinstance(payload, dict) else payload
    if not isinstance(drafts, list):
        msg = "Text generation response is missing a `tasks` list"
        raise LLMError(msg)
    return drafts


async def brain_dump(
    session: AsyncSession,
    llm: TextGenerationClient,
    *,
    text: str,
    defaults: BrainDumpDefaults,
    today: str | None = None,
) -> BrainDumpResult:
    """Ask the collaborator for task drafts and create one task per valid draft."""
    if today is None:
        today = utcnow().date().isoformat()
    payload = await llm.complete_json(
        system=build_system_prompt(defaults, today=today),
        user=text,
    )
    drafts = _extract_drafts(payload)

    result = BrainDumpResult()
    for draft in drafts:
        task_create = draft_to_task_create(draft, defaults)
        if task_create is None:
            result.skipped += 1
            continue
        result.tasks.append(await create_task(session, task_create))

    logger.info(
        "brain_dump.completed drafts=%s created=%s skipped=%s",
        len(drafts),
        len(result.tasks),
        result.skipped,
    )
    return result
