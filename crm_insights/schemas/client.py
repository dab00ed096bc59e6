from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field, field_validator

from crm_insights.schemas.lead import plain_value
from crm_insights.services.dates import parse_timestamp


class ServiceRecord(BaseModel):
    service_type: str | None = Field(default=None, validation_alias=AliasChoices("service_type", "type"))
    status: str | None = None
    start_date: datetime | None = Field(default=None, validation_alias=AliasChoices("start_date", "startDate"))

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        return plain_value(value)

    @field_validator("start_date", mode="before")
    @classmethod
    def lenient_start_date(cls, value):
        return parse_timestamp(value)

    class Config:
        from_attributes = True


class ClientRecord(BaseModel):
    id: int | str | None = None
    onboarded_at: datetime | None = Field(default=None, validation_alias=AliasChoices("onboarded_at", "onboardedAt"))
    services: list[ServiceRecord] = Field(default_factory=list)

    @field_validator("onboarded_at", mode="before")
    @classmethod
    def lenient_onboarded_at(cls, value):
        return parse_timestamp(value)

    @field_validator("services", mode="before")
    @classmethod
    def missing_services(cls, value):
        return [] if value is None else value

    class Config:
        from_attributes = True
