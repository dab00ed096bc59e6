from datetime import datetime
import enum

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm_insights.core.database import Base


class ServiceStatus(str, enum.Enum):
    # Open set; analytics only reads Active.
    active = "Active"
    paused = "Paused"
    cancelled = "Cancelled"


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    company_name: Mapped[str] = mapped_column(String(160), nullable=False, default="")
    contact_name: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str | None] = mapped_column(String(80))
    onboarded_at: Mapped[datetime | None] = mapped_column(DateTime)

    services: Mapped[list["ClientService"]] = relationship(
        back_populates="client",
        order_by="ClientService.position",
        cascade="all, delete-orphan",
    )


class ClientService(Base):
    __tablename__ = "client_services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False, index=True)
    # Services keep the order they were added to the client in.
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    service_type: Mapped[str] = mapped_column(String(80), nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    status: Mapped[str] = mapped_column(String(40), default=ServiceStatus.active.value, nullable=False)
    start_date: Mapped[datetime | None] = mapped_column(DateTime)

    client: Mapped[Client] = relationship(back_populates="services")
