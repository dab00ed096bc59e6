import json
import logging
from pathlib import Path

from crm_insights.core.config import get_settings
from crm_insights.core.database import Base, SessionLocal, engine
from crm_insights.core.logging_config import setup_logging
from crm_insights.models import Lead
from crm_insights.schemas.analytics import Snapshot
from crm_insights.services.snapshot import seed_snapshot

logger = logging.getLogger(__name__)


def load_snapshot_file(path: str | Path) -> Snapshot:
    # Accepts snake_case or the CRM front-end's camelCase field names.
    with open(path, encoding="utf-8") as fh:
        return Snapshot.model_validate(json.load(fh))


def seed_from_file(path: str | Path) -> bool:
    """Seed an empty store from a JSON snapshot. Returns False when data already exists."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Lead).first() is not None:
            logger.info("Store already has data; skipping seed from %s", path)
            return False

        snapshot = load_snapshot_file(path)
        seed_snapshot(db, snapshot)
        logger.info(
            "Seeded %d leads, %d clients, %d payments, %d campaigns from %s",
            len(snapshot.leads),
            len(snapshot.clients),
            len(snapshot.payments),
            len(snapshot.campaigns),
            path,
        )
        return True
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    snapshot_path = get_settings().BOOTSTRAP_SNAPSHOT_PATH
    if snapshot_path:
        seed_from_file(snapshot_path)
    else:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created. Set BOOTSTRAP_SNAPSHOT_PATH to seed sample data.")
