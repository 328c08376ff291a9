from starlette.requests import Request

from daily_report.db import models
from daily_report.services.admin_log import AdminActionType, get_ip_address, list_admin_logs, record_admin_log


def _request(headers=None, client=("10.0.0.9", 5000)):
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def test_ip_address_prefers_forwarded_for():
    assert get_ip_address(_request({"X-Forwarded-For": "203.0.113.5, 10.0.0.1"})) == "203.0.113.5"
    assert get_ip_address(_request({"X-Real-IP": "198.51.100.7"})) == "198.51.100.7"
    assert get_ip_address(_request()) == "10.0.0.9"
    assert get_ip_address(_request(client=None)) is None


def test_record_and_list_filters(db, admin, user):
    record_admin_log(db, admin, AdminActionType.VIEW_USERS, details="first")
    record_admin_log(db, admin, AdminActionType.VIEW_REPORT, target_user_id=user.id, target_report_id=7)
    record_admin_log(db, admin, "VIEW_LOGS")

    logs = list_admin_logs(db)
    assert [log.action_type for log in logs] == ["VIEW_LOGS", "VIEW_REPORT", "VIEW_USERS"]
    assert logs[0].admin.employee_number == admin.employee_number

    assert [log.details for log in list_admin_logs(db, action_type=AdminActionType.VIEW_USERS)] == ["first"]
    assert list_admin_logs(db, admin_id=user.id) == []
    assert len(list_admin_logs(db, limit=1, offset=1)) == 1


def test_log_endpoints(admin_client, user, db):
    r = admin_client.post(
        "/api/admin/log",
        json={"action_type": "VIEW_REPORT", "target_user_id": user.id, "details": "opened from dashboard"},
    )
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert r.json()["log"]["action_type"] == "VIEW_REPORT"

    r = admin_client.get("/api/admin/log", params={"action_type": "VIEW_REPORT"})
    assert r.status_code == 200
    (entry,) = r.json()
    assert entry["admin"]["employee_number"] == "A001"
    assert entry["details"] == "opened from dashboard"

    # reading the log was itself recorded
    assert db.query(models.AdminLog).filter_by(action_type="VIEW_LOGS").count() == 1


def test_log_endpoint_rejects_unknown_action(admin_client):
    r = admin_client.post("/api/admin/log", json={"action_type": "DROP_TABLES"})
    assert r.status_code == 400
    assert admin_client.post("/api/admin/log", json={}).status_code == 400


def test_log_limit_bounds(admin_client):
    assert admin_client.get("/api/admin/log", params={"limit": 0}).status_code == 400
    assert admin_client.get("/api/admin/log", params={"limit": 500}).status_code == 200
