from datetime import datetime

from beanie import Document
from pydantic import ConfigDict, Field

# Other services write these as plain JSON numbers, so floats and nulls occur.
Number = int | float


class User(Document):
    """Credit fields of a user; the rest of the record belongs to other services."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str | None = None
    name: str | None = None
    daily_limit: Number | None = Field(default=10, alias="dailyLimit")
    credits_used_today: Number | None = Field(default=0, alias="creditsUsedToday")
    credits_last_reset: datetime | None = Field(default=None, alias="creditsLastReset")
    # date string (YYYY-MM-DD) -> credits used that day, in insertion order
    credit_history: dict[str, Number] | None = Field(default_factory=dict, alias="creditHistory")

    class Settings:
        name = "users"
