from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import PersistenceError
from app.schemas.snapshot import TimetableSnapshot

logger = logging.getLogger(__name__)


class JsonFileSnapshotWriter:
    """Stores every committed snapshot as one JSON document."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, snapshot: TimetableSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temporary = self.path.with_name(f"{self.path.name}.tmp")
        temporary.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        # Replace in one step so a crash never leaves a half-written file behind.
        os.replace(temporary, self.path)

    def load(self) -> TimetableSnapshot | None:
        if not self.path.exists():
            return None
        try:
            return TimetableSnapshot.model_validate_json(self.path.read_text(encoding="utf-8"))
        except PydanticValidationError as exc:
            logger.exception("Timetable snapshot at %s is invalid", self.path)
            raise PersistenceError(f"Timetable snapshot at {self.path} is invalid") from exc
