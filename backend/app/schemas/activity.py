from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityLogOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: str
    entity_type: str | None
    entity_id: str | None
    details: dict
    version: int
    created_at: datetime
