from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field, field_validator

from crm_insights.services.dates import parse_timestamp


class CampaignRecord(BaseModel):
    id: int | str | None = None
    sent_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("sent_count", "sentCount"))
    open_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("open_count", "openCount"))
    click_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("click_count", "clickCount"))
    created_at: datetime | None = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))

    @field_validator("sent_count", "open_count", "click_count", mode="before")
    @classmethod
    def missing_count(cls, value):
        return 0 if value is None else value

    @field_validator("created_at", mode="before")
    @classmethod
    def lenient_created_at(cls, value):
        return parse_timestamp(value)

    class Config:
        from_attributes = True
