from datetime import datetime
import enum

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from crm_insights.core.database import Base


class LeadStatus(str, enum.Enum):
    # Lead status is free-form in the CRM; these are the values analytics reads.
    new = "New"
    contacted = "Contacted"
    qualified = "Qualified"
    proposal = "Proposal"
    negotiation = "Negotiation"
    converted = "Converted"
    closed_won = "Closed Won"
    closed_lost = "Closed Lost"


class Lead(Base):
    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    full_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    country: Mapped[str | None] = mapped_column(String(80))
    status: Mapped[str] = mapped_column(String(40), default=LeadStatus.new.value, nullable=False)
    source: Mapped[str | None] = mapped_column(String(80))
    created_at: Mapped[datetime | None] = mapped_column(DateTime)
