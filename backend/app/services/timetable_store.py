from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
import logging
from threading import RLock
from typing import Deque, Protocol, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.schemas.activity import ActivityLogOut
from app.schemas.schedule import Schedule
from app.schemas.snapshot import TimetableSnapshot

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# collection attribute -> label used in NotFoundError messages
RESOURCE_LABELS = {
    "teachers": "Teacher",
    "subjects": "Subject",
    "class_grades": "Class",
    "periods": "Period",
    "academic_sessions": "Academic session",
    "schedules": "Schedule",
}

# collection attribute -> Schedule foreign key it cascades into
CASCADE_KEYS = {
    "teachers": "teacher_id",
    "subjects": "subject_id",
    "class_grades": "class_id",
    "periods": "period_id",
    "academic_sessions": "academic_session_id",
}


def coerce_payload(model: type[ModelT], payload: ModelT | dict) -> ModelT:
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid {model.__name__} payload",
            details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        ) from exc


class SnapshotWriter(Protocol):
    def save(self, snapshot: TimetableSnapshot) -> None: ...


class TimetableDraft:
    """Mutable working copy of a snapshot, private to one transaction."""

    def __init__(self, snapshot: TimetableSnapshot) -> None:
        self.collections: dict[str, dict[str, BaseModel]] = {
            name: {item.id: item for item in getattr(snapshot, name)} for name in RESOURCE_LABELS
        }
        self.school_days = list(snapshot.school_days)
        self.changed = False
        self.activity: list[dict] = []

    @property
    def schedules(self) -> list[Schedule]:
        return list(self.collections["schedules"].values())

    def items(self, collection: str) -> list:
        return list(self.collections[collection].values())

    def get(self, collection: str, item_id: str):
        return self.collections[collection].get(item_id)

    def require(self, collection: str, item_id: str):
        item = self.get(collection, item_id)
        if item is None:
            raise NotFoundError(RESOURCE_LABELS[collection], item_id)
        return item

    def put(self, collection: str, item: BaseModel) -> None:
        # dict assignment keeps the original position for replaced ids
        self.collections[collection][item.id] = item
        self.changed = True

    def remove(self, collection: str, item_id: str) -> BaseModel | None:
        item = self.collections[collection].pop(item_id, None)
        if item is not None:
            self.changed = True
        return item

    def remove_dependent_schedules(self, collection: str, item_id: str) -> list[str]:
        key = CASCADE_KEYS[collection]
        removed = [item.id for item in self.schedules if getattr(item, key) == item_id]
        for schedule_id in removed:
            self.remove("schedules", schedule_id)
        return removed

    def replace_school_days(self, school_days: list) -> None:
        self.school_days = list(school_days)
        self.changed = True

    def record(self, action: str, entity_type: str | None = None, entity_id: str | None = None, **details) -> None:
        self.activity.append(
            {"action": action, "entity_type": entity_type, "entity_id": entity_id, "details": details}
        )

    def freeze(self, version: int) -> TimetableSnapshot:
        values = {name: tuple(items.values()) for name, items in self.collections.items()}
        return TimetableSnapshot(version=version, school_days=tuple(self.school_days), **values)


class TimetableStore:
    """Owns the current snapshot and serialises writers.

    Mutations run inside :meth:`transaction`; the new snapshot is handed to the
    optional writer and only then published, so a failed write publishes
    nothing. Readers call :meth:`snapshot` and never observe a partial commit.
    """

    def __init__(
        self,
        snapshot: TimetableSnapshot | None = None,
        *,
        writer: SnapshotWriter | None = None,
        activity_log_limit: int = 500,
    ) -> None:
        self._snapshot = snapshot or TimetableSnapshot()
        self._writer = writer
        self._lock = RLock()
        self._activity: Deque[ActivityLogOut] = deque(maxlen=activity_log_limit)

    def snapshot(self) -> TimetableSnapshot:
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version

    def activity(self, limit: int | None = None) -> list[ActivityLogOut]:
        entries = list(reversed(self._activity))
        return entries[:limit] if limit is not None else entries

    @contextmanager
    def transaction(self) -> Iterator[TimetableDraft]:
        with self._lock:
            draft = TimetableDraft(self._snapshot)
            yield draft
            if not draft.changed:
                return
            committed = draft.freeze(version=self._snapshot.version + 1)
            if self._writer is not None:
                try:
                    self._writer.save(committed)
                except OSError as exc:
                    logger.exception("Failed to persist timetable snapshot version %d", committed.version)
                    raise PersistenceError("Failed to persist timetable snapshot") from exc
            self._snapshot = committed
            now = datetime.now(timezone.utc)
            for entry in draft.activity:
                self._activity.append(ActivityLogOut(version=committed.version, created_at=now, **entry))
            logger.debug("Committed timetable snapshot version %d", committed.version)
