import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from crm_insights.core.exceptions import SnapshotLoadError
from crm_insights.models.campaign import Campaign
from crm_insights.models.client import Client, ClientService, ServiceStatus
from crm_insights.models.lead import Lead
from crm_insights.models.payment import Payment, PaymentStatus
from crm_insights.schemas.analytics import Snapshot
from crm_insights.schemas.campaign import CampaignRecord
from crm_insights.schemas.client import ClientRecord, ServiceRecord
from crm_insights.schemas.lead import LeadRecord
from crm_insights.schemas.payment import PaymentRecord

logger = logging.getLogger(__name__)


def load_snapshot(db: Session) -> Snapshot:
    """Read every collection once and detach it from the session as plain records."""
    try:
        leads = db.query(Lead).order_by(Lead.id).all()
        clients = db.query(Client).options(selectinload(Client.services)).order_by(Client.id).all()
        payments = db.query(Payment).order_by(Payment.id).all()
        campaigns = db.query(Campaign).order_by(Campaign.id).all()
    except SQLAlchemyError as exc:
        logger.error("Failed to load analytics snapshot: %s", exc, exc_info=True)
        raise SnapshotLoadError("Could not read analytics data") from exc

    snapshot = Snapshot(
        leads=[LeadRecord.model_validate(row) for row in leads],
        clients=[
            ClientRecord(
                id=row.id,
                onboarded_at=row.onboarded_at,
                services=[
                    ServiceRecord(service_type=s.service_type, status=s.status, start_date=s.start_date)
                    for s in row.services
                ],
            )
            for row in clients
        ],
        payments=[PaymentRecord.model_validate(row) for row in payments],
        campaigns=[CampaignRecord.model_validate(row) for row in campaigns],
    )
    logger.info(
        "Loaded snapshot: %d leads, %d clients, %d payments, %d campaigns",
        len(snapshot.leads),
        len(snapshot.clients),
        len(snapshot.payments),
        len(snapshot.campaigns),
    )
    return snapshot


def seed_snapshot(db: Session, snapshot: Snapshot) -> None:
    """Write a snapshot into the store (used by bootstrap and tests)."""
    try:
        for lead in snapshot.leads:
            db.add(Lead(country=lead.country, status=lead.status or "", created_at=lead.created_at))

        for client in snapshot.clients:
            row = Client(onboarded_at=client.onboarded_at)
            for position, service in enumerate(client.services):
                row.services.append(
                    ClientService(
                        position=position,
                        service_type=service.service_type or "",
                        status=service.status or ServiceStatus.active.value,
                        start_date=service.start_date,
                    )
                )
            db.add(row)

        for payment in snapshot.payments:
            db.add(
                Payment(
                    amount=payment.amount,
                    status=payment.status or PaymentStatus.due.value,
                    date=payment.date,
                )
            )

        for campaign in snapshot.campaigns:
            db.add(
                Campaign(
                    sent_count=campaign.sent_count,
                    open_count=campaign.open_count,
                    click_count=campaign.click_count,
                    created_at=campaign.created_at,
                )
            )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to seed snapshot: %s", exc)
        raise SnapshotLoadError("Could not seed analytics data", details={"error": str(exc)}) from exc
