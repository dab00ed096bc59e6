"""
API tests for the analytics endpoints
"""
from crm_insights.schemas.analytics import Snapshot
from crm_insights.services.snapshot import seed_snapshot

NOW_PARAM = {"now": "2026-10-19T15:30:00Z"}

SNAPSHOT_BODY = {
    "leads": [
        {"country": "US", "status": "Contacted", "createdAt": "2026-10-19T09:00:00Z"},
        {"country": "US", "status": "Closed Won", "createdAt": "2026-10-19T10:00:00Z"},
        {"country": "FR", "status": "Contacted", "createdAt": "2026-10-11T10:00:00Z"},
    ],
    "clients": [
        {"onboardedAt": "2026-10-02", "services": [{"type": "SEO", "status": "Active", "startDate": "2026-10-02"}]},
    ],
    "payments": [{"amount": 500, "status": "Paid", "date": "2026-10-02"}],
    "campaigns": [
        {"sentCount": 100, "openCount": 40, "clickCount": 10},
        {"sentCount": 0, "openCount": 0, "clickCount": 0},
    ],
}


class TestDashboardFromBody:
    def test_computes_summary_from_posted_snapshot(self, client):
        response = client.post("/api/v1/analytics/dashboard", params=NOW_PARAM, json=SNAPSHOT_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["leads_count"] == 3
        assert data["active_services_count"] == 1
        assert data["monthly_revenue"] == 500.0
        assert data["trends"]["revenue"] == {"value": "+100%", "is_up": True}
        assert data["country_distribution"] == {"US": 2, "FR": 1}
        assert data["campaign_stats"] == {"sent": 100, "opens": 40, "click_rate": "10.0%"}

    def test_chart_ends_on_requested_day(self, client):
        data = client.post("/api/v1/analytics/dashboard", params=NOW_PARAM, json=SNAPSHOT_BODY).json()

        chart = data["chart"]
        assert len(chart) == 7
        assert chart[-1] == {"label": "Mon", "date": "2026-10-19", "contacted": 1, "converted": 1}
        # Created on the 11th: outside the window.
        assert sum(point["contacted"] for point in chart) == 1

    def test_empty_body(self, client):
        response = client.post("/api/v1/analytics/dashboard", params=NOW_PARAM, json={})

        assert response.status_code == 200
        assert response.json()["trends"]["leads"] == {"value": "0%", "is_up": False}

    def test_invalid_record_is_a_validation_error(self, client):
        body = {"campaigns": [{"sentCount": -5}]}

        response = client.post("/api/v1/analytics/dashboard", params=NOW_PARAM, json=body)

        assert response.status_code == 422

    def test_overflowing_prior_revenue(self, client):
        body = {
            "payments": [
                {"amount": 1e308, "status": "Paid", "date": "2026-09-01"},
                {"amount": 1e308, "status": "Paid", "date": "2026-09-02"},
                {"amount": 5, "status": "Paid", "date": "2026-10-02"},
            ]
        }

        response = client.post("/api/v1/analytics/dashboard", params=NOW_PARAM, json=body)

        assert response.status_code == 200
        assert response.json()["trends"]["revenue"] == {"value": "0%", "is_up": False}

    def test_now_defaults_to_current_time(self, client):
        response = client.post("/api/v1/analytics/dashboard", json={})

        assert response.status_code == 200
        assert len(response.json()["chart"]) == 7


class TestDashboardFromStore:
    def test_reads_the_store(self, client, db_session, sample_snapshot):
        seed_snapshot(db_session, sample_snapshot)

        response = client.get("/api/v1/analytics/dashboard", params=NOW_PARAM)

        assert response.status_code == 200
        data = response.json()
        assert data["leads_count"] == 6
        assert data["trends"]["leads"]["value"] == "+300%"
        assert data["country_distribution"] == {"US": 3, "FR": 2, "DE": 1}

    def test_store_and_body_accept_the_same_statuses(self, client, db_session):
        body = {
            "clients": [{"onboardedAt": "2026-10-02", "services": [{"status": "Expired", "startDate": "2026-10-02"}]}],
            "payments": [
                {"amount": 500, "status": "Paid", "date": "2026-10-02"},
                {"amount": 100, "status": "Pending", "date": "2026-10-03"},
            ],
        }
        seed_snapshot(db_session, Snapshot.model_validate(body))

        from_store = client.get("/api/v1/analytics/dashboard", params=NOW_PARAM).json()
        from_body = client.post("/api/v1/analytics/dashboard", params=NOW_PARAM, json=body).json()

        for key in ("monthly_revenue", "active_services_count", "trends"):
            assert from_store[key] == from_body[key]
        assert from_store["monthly_revenue"] == 500.0


class TestPerformance:
    def test_default_range_is_last_seven_days(self, client, db_session, sample_snapshot):
        seed_snapshot(db_session, sample_snapshot)

        response = client.get("/api/v1/analytics/performance", params=NOW_PARAM)

        assert response.status_code == 200
        data = response.json()
        assert data["range"]["key"] == "7d"
        assert data["funnel"]["total"] == 3
        assert data["email"]["click_rate"] == 10
        assert [p["label"] for p in data["revenue"]][-1] == "Oct 26"
        assert len(data["revenue"]) == 6

    def test_custom_range(self, client, db_session, sample_snapshot):
        seed_snapshot(db_session, sample_snapshot)

        params = {**NOW_PARAM, "range": "custom", "start": "2026-09-01", "end": "2026-09-30"}
        data = client.get("/api/v1/analytics/performance", params=params).json()

        assert data["funnel"]["total"] == 1
        assert data["funnel"]["contacted"] == 1

    def test_unknown_range_is_rejected(self, client):
        response = client.get("/api/v1/analytics/performance", params={**NOW_PARAM, "range": "2w"})

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "INVALID_DATE_RANGE"

    def test_backwards_custom_range_is_rejected(self, client):
        params = {**NOW_PARAM, "range": "custom", "start": "2026-10-10", "end": "2026-10-01"}

        response = client.get("/api/v1/analytics/performance", params=params)

        assert response.status_code == 422
