from datetime import datetime
import enum

from pydantic import AliasChoices, BaseModel, Field, field_validator

from crm_insights.services.dates import parse_timestamp


def plain_value(value):
    """Store enums arrive as enum members; records hold their string values."""
    if isinstance(value, enum.Enum):
        return value.value
    return value


class LeadRecord(BaseModel):
    id: int | str | None = None
    country: str | None = None
    status: str | None = "New"
    # Unparseable timestamps become None; analytics skips them.
    created_at: datetime | None = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        return plain_value(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def lenient_created_at(cls, value):
        return parse_timestamp(value)

    class Config:
        from_attributes = True
