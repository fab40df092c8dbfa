from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class StoredValue(SQLModel, table=True):
    # One row per storage key ("chefoodai_token", "chefoodai_user", ...)
    key: str = Field(primary_key=True)
    # Raw string exactly as it was written; JSON for the cached user
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
