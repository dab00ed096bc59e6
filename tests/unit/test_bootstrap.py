"""
Tests for seeding the store from a JSON snapshot file
"""
import json

from crm_insights.bootstrap import load_snapshot_file, seed_from_file
from crm_insights.core.database import SessionLocal
from crm_insights.models import Campaign, Lead


def _write_snapshot(path):
    path.write_text(
        json.dumps(
            {
                "leads": [
                    {"country": "US", "status": "New", "createdAt": "2026-10-18T10:00:00Z"},
                    {"country": "IN", "status": "Contacted", "createdAt": "2026-10-19T10:00:00Z"},
                ],
                "campaigns": [{"sentCount": 10, "openCount": 5, "clickCount": 1}],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestBootstrap:
    def test_load_snapshot_file(self, tmp_path):
        snapshot = load_snapshot_file(_write_snapshot(tmp_path / "seed.json"))

        assert len(snapshot.leads) == 2
        assert snapshot.campaigns[0].sent_count == 10

    def test_seed_only_an_empty_store(self, tables, tmp_path):
        path = _write_snapshot(tmp_path / "seed.json")

        assert seed_from_file(path) is True
        assert seed_from_file(path) is False

        db = SessionLocal()
        try:
            assert db.query(Lead).count() == 2
            assert db.query(Campaign).count() == 1
        finally:
            db.close()
