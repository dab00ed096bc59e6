from datetime import datetime
import enum

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from crm_insights.core.database import Base


class PaymentStatus(str, enum.Enum):
    # Payment status is free-form in the CRM (e.g. "Pending"); only Paid counts as revenue.
    paid = "Paid"
    due = "Due"
    overdue = "Overdue"


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    invoice_id: Mapped[str | None] = mapped_column(String(40), index=True)
    client_id: Mapped[int | None] = mapped_column(ForeignKey("clients.id"), index=True)
    amount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    status: Mapped[str] = mapped_column(String(40), default=PaymentStatus.due.value, nullable=False)
    date: Mapped[datetime | None] = mapped_column(DateTime)
