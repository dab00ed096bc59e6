from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from crm_insights.schemas.lead import plain_value
from crm_insights.services.dates import parse_timestamp


class PaymentRecord(BaseModel):
    id: int | str | None = None
    amount: float = Field(default=0.0, allow_inf_nan=False)
    status: str | None = None
    date: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        return plain_value(value)

    @field_validator("amount", mode="before")
    @classmethod
    def missing_amount(cls, value):
        return 0.0 if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, value):
        return parse_timestamp(value)

    class Config:
        from_attributes = True
