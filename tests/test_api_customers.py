"""
Customers API tests — dashboard list, add/edit/delete, stats, form layout.

Covers:
    - Search (q) and status filter, with "showing N of M" counters
    - Create by either role, update/delete by super admin only
    - Full-replace update, field policy on the environment field
    - 404 on unknown ids, 422 on invalid payloads and filters
"""

import pytest

NEW_CUSTOMER = {
    "customer": "Northwind",
    "partner": "Contoso Partners",
    "onboarding_status": "In Progress",
    "initial_requester": "Ana Lopez",
    "accounts_count": 4,
}


class TestList:
    def test_list_all_in_insertion_order(self, user_client):
        res = user_client.get("/api/v1/customers")
        assert res.status_code == 200
        body = res.get_json()
        assert body["total"] == body["showing"] == 6
        assert [c["id"] for c in body["items"]] == ["1", "2", "3", "4", "5", "6"]
        assert body["items"][0]["customer"] == "Academy of General Dentistry"

    def test_search_is_case_insensitive(self, user_client):
        body = user_client.get("/api/v1/customers?q=EPHARMA").get_json()
        assert [c["customer"] for c in body["items"]] == ["Epharma"]
        assert body["showing"] == 1
        assert body["total"] == 6

    def test_search_matches_requester(self, user_client):
        body = user_client.get("/api/v1/customers?q=fabio").get_json()
        assert [c["customer"] for c in body["items"]] == ["Epharma"]

    def test_search_and_status_combine(self, user_client):
        body = user_client.get("/api/v1/customers", query_string={"q": "tech", "status": "In Progress"}).get_json()
        assert [c["customer"] for c in body["items"]] == [
            "Academy of General Dentistry", "Global Finance Corp",
        ]

    def test_status_filter_blocked(self, user_client):
        body = user_client.get("/api/v1/customers", query_string={"status": "Blocked"}).get_json()
        assert [c["customer"] for c in body["items"]] == ["BCDR AerieHub"]

    def test_no_match(self, user_client):
        body = user_client.get("/api/v1/customers?q=zzz").get_json()
        assert body["items"] == []
        assert body["showing"] == 0

    def test_invalid_status_filter(self, user_client):
        res = user_client.get("/api/v1/customers?status=Done")
        assert res.status_code == 422
        assert res.get_json()["code"] == "ERR_VALIDATION_INVALID"

    def test_environment_label_serialized(self, user_client):
        item = user_client.get("/api/v1/customers/6").get_json()
        assert item["onboarded_environment"] == "matilda-optimize.au"
        assert item["onboarded_environment_label"] == "Matilda Optimize AU"


class TestCreate:
    @pytest.mark.parametrize("fixture_name", ["admin_client", "user_client"])
    def test_both_roles_may_create(self, request, fixture_name):
        c = request.getfixturevalue(fixture_name)
        res = c.post("/api/v1/customers", json=NEW_CUSTOMER)
        assert res.status_code == 201
        body = res.get_json()
        assert body["id"] == "7"
        assert body["customer"] == "Northwind"
        assert body["target_cloud"] == "AWS"
        listed = c.get("/api/v1/customers").get_json()["items"]
        assert listed[-1]["id"] == "7"

    def test_create_missing_required(self, user_client):
        res = user_client.post("/api/v1/customers", json={"customer": "Only name"})
        assert res.status_code == 422
        assert "partner" in res.get_json()["details"]
        assert user_client.get("/api/v1/customers").get_json()["total"] == 6

    @pytest.mark.parametrize("count", [10**20, "100000000000000000000"])
    def test_oversized_accounts_count_rejected(self, admin_client, count):
        res = admin_client.post("/api/v1/customers", json={**NEW_CUSTOMER, "accounts_count": count})
        assert res.status_code == 422
        assert "accounts_count" in res.get_json()["details"]
        assert admin_client.get("/api/v1/customers").get_json()["total"] == 6

    def test_oversized_accounts_count_on_update(self, admin_client):
        res = admin_client.put("/api/v1/customers/1", json={**NEW_CUSTOMER, "accounts_count": 10**20})
        assert res.status_code == 422
        assert admin_client.get("/api/v1/customers/1").get_json()["accounts_count"] == 5

    def test_environment_dropped_for_non_completed(self, user_client):
        payload = {**NEW_CUSTOMER, "onboarded_environment": "matilda-optimize"}
        body = user_client.post("/api/v1/customers", json=payload).get_json()
        assert body["onboarded_environment"] is None

    def test_environment_kept_for_completed(self, user_client):
        payload = {**NEW_CUSTOMER, "onboarding_status": "Completed",
                   "onboarded_environment": "rapid-assessments"}
        body = user_client.post("/api/v1/customers", json=payload).get_json()
        assert body["onboarded_environment"] == "rapid-assessments"


class TestDetail:
    def test_get_customer(self, user_client):
        res = user_client.get("/api/v1/customers/2")
        assert res.status_code == 200
        body = res.get_json()
        assert body["handed_over_to"] == "Chida"
        assert body["onboarded_date"] == "2025-07-11"

    def test_get_unknown(self, user_client):
        res = user_client.get("/api/v1/customers/999")
        assert res.status_code == 404
        assert res.get_json()["code"] == "ERR_NOT_FOUND"


class TestUpdate:
    def test_normal_user_forbidden(self, user_client):
        res = user_client.put("/api/v1/customers/1", json=NEW_CUSTOMER)
        assert res.status_code == 403
        assert res.get_json()["details"]["required"] == "customers.update"
        assert user_client.get("/api/v1/customers/1").get_json()["customer"] == "Academy of General Dentistry"

    def test_admin_full_replace_keeps_position(self, admin_client):
        res = admin_client.put("/api/v1/customers/3", json=NEW_CUSTOMER)
        assert res.status_code == 200
        body = res.get_json()
        assert body["id"] == "3"
        assert body["customer"] == "Northwind"
        assert body["notes"] == ""
        assert body["handed_over_to"] == ""
        items = admin_client.get("/api/v1/customers").get_json()["items"]
        assert items[2]["customer"] == "Northwind"
        assert len(items) == 6

    def test_admin_update_unknown(self, admin_client):
        res = admin_client.put("/api/v1/customers/999", json=NEW_CUSTOMER)
        assert res.status_code == 404
        assert admin_client.get("/api/v1/customers").get_json()["total"] == 6

    def test_admin_update_invalid(self, admin_client):
        res = admin_client.put("/api/v1/customers/1", json={**NEW_CUSTOMER, "cost_jobs": "Paused"})
        assert res.status_code == 422
        assert "cost_jobs" in res.get_json()["details"]


class TestDelete:
    def test_normal_user_forbidden(self, user_client):
        assert user_client.delete("/api/v1/customers/1").status_code == 403
        assert user_client.get("/api/v1/customers").get_json()["total"] == 6

    def test_admin_delete(self, admin_client):
        res = admin_client.delete("/api/v1/customers/1")
        assert res.status_code == 200
        assert res.get_json() == {"message": "Deleted", "id": "1"}
        assert admin_client.get("/api/v1/customers/1").status_code == 404
        assert admin_client.get("/api/v1/customers").get_json()["total"] == 5

    def test_admin_delete_unknown(self, admin_client):
        assert admin_client.delete("/api/v1/customers/abc").status_code == 404


class TestStatsAndForm:
    def test_stats(self, user_client):
        assert user_client.get("/api/v1/customers/stats").get_json() == {
            "total": 6, "completed": 3, "in_progress": 2, "blocked": 1,
        }

    def test_form_fields_completed(self, user_client):
        body = user_client.get("/api/v1/customers/form-fields?status=Completed").get_json()
        assert body["requires_environment"] is True
        assert [e["value"] for e in body["environments"]] == [
            "matilda-optimize", "rapid-assessments", "matilda-optimize.au",
        ]

    def test_form_fields_blocked(self, user_client):
        body = user_client.get("/api/v1/customers/form-fields?status=Blocked").get_json()
        assert body["requires_environment"] is False
        assert "onboarded_environment" not in body["fields"]

    def test_form_fields_invalid(self, user_client):
        assert user_client.get("/api/v1/customers/form-fields?status=Nope").status_code == 422
