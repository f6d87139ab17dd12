"""
Test suite for job endpoints.

Tests cover:
- Admin-only creation, update and deletion
- Public listing with filters
- Retrieval and error handling
"""

import pytest


NEW_JOB = {
    "title": "Spray Foam Technician",
    "salary": 47850,
    "equity": 0,
    "companyHandle": "c1",
}


class TestJobCreation:
    """Tests for POST /jobs"""

    def test_create_job_as_admin(self, client, seed, admin_headers):
        response = client.post("/jobs/", json=NEW_JOB, headers=admin_headers)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert job["title"] == "Spray Foam Technician"
        assert job["salary"] == 47850
        assert job["equity"] == 0
        assert job["companyHandle"] == "c1"

    def test_create_job_non_admin(self, client, seed, u1_headers):
        response = client.post("/jobs/", json=NEW_JOB, headers=u1_headers)
        assert response.status_code == 401

    def test_create_job_anon(self, client, seed):
        response = client.post("/jobs/", json=NEW_JOB)
        assert response.status_code == 401

    def test_create_job_missing_fields(self, client, seed, admin_headers):
        response = client.post("/jobs/", json={"title": "Duct Truck Worker", "salary": 50000}, headers=admin_headers)

        assert response.status_code == 400
        assert isinstance(response.json()["detail"], list)

    def test_create_job_invalid_data(self, client, seed, admin_headers):
        response = client.post("/jobs/", json={**NEW_JOB, "salary": "seven"}, headers=admin_headers)
        assert response.status_code == 400

    def test_create_job_unknown_company(self, client, seed, admin_headers):
        response = client.post("/jobs/", json={**NEW_JOB, "companyHandle": "nope"}, headers=admin_headers)
        assert response.status_code == 400

    def test_create_job_salary_too_large(self, client, seed, admin_headers):
        response = client.post("/jobs/", json={**NEW_JOB, "salary": 10**19}, headers=admin_headers)
        assert response.status_code == 400


class TestJobListing:
    """Tests for GET /jobs"""

    def test_list_jobs_anon(self, client, seed):
        response = client.get("/jobs/")

        assert response.status_code == 200
        assert [j["title"] for j in response.json()["jobs"]] == ["j1", "j2", "j3"]

    def test_all_filters(self, client, seed):
        response = client.get("/jobs/", params={"title": "j", "minSalary": 1, "hasEquity": "false"})
        assert [j["title"] for j in response.json()["jobs"]] == ["j1"]

    def test_title_filter(self, client, seed):
        response = client.get("/jobs/", params={"title": "J3"})
        assert [j["title"] for j in response.json()["jobs"]] == ["j3"]

    def test_min_salary_filter(self, client, seed):
        response = client.get("/jobs/", params={"minSalary": 11})
        assert [j["title"] for j in response.json()["jobs"]] == ["j2", "j3"]

    def test_has_equity_filter(self, client, seed):
        response = client.get("/jobs/", params={"hasEquity": "true"})
        assert [j["title"] for j in response.json()["jobs"]] == ["j2", "j3"]

    def test_unknown_params_ignored(self, client, seed):
        response = client.get("/jobs/", params={"color": "blue"})

        assert response.status_code == 200
        assert len(response.json()["jobs"]) == 3

    def test_negative_min_salary(self, client, seed):
        response = client.get("/jobs/", params={"minSalary": -5})
        assert response.status_code == 400

    def test_decimal_min_salary(self, client, seed):
        """A fractional floor still filters; it is not silently dropped"""
        response = client.get("/jobs/", params={"minSalary": "25.5"})
        assert [j["title"] for j in response.json()["jobs"]] == ["j3"]

    def test_min_salary_too_large(self, client, seed):
        response = client.get("/jobs/", params={"minSalary": "99999999999999999999"})

        assert response.status_code == 400
        assert isinstance(response.json()["detail"], list)


class TestJobRetrieval:
    """Tests for GET /jobs/{id}"""

    def test_get_job(self, client, seed):
        job_id = seed["jobs"]["j1"]
        response = client.get(f"/jobs/{job_id}")

        assert response.status_code == 200
        assert response.json() == {
            "job": {"id": job_id, "title": "j1", "salary": 10, "equity": 0, "companyHandle": "c1"}
        }

    def test_get_nonexistent_job(self, client, seed):
        response = client.get("/jobs/99999")

        assert response.status_code == 404
        assert "no job" in response.json()["detail"].lower()


class TestJobUpdate:
    """Tests for PATCH /jobs/{id}"""

    def test_update_all_fields(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(
            f"/jobs/{job_id}",
            json={"title": "j17", "salary": 57000, "equity": 0.33, "companyHandle": "c2"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "job": {"id": job_id, "title": "j17", "salary": 57000, "equity": 0.33, "companyHandle": "c2"}
        }

    def test_update_some_fields(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"title": "j4"}, headers=admin_headers)

        assert response.json()["job"]["title"] == "j4"
        assert response.json()["job"]["salary"] == 10

    def test_update_rejects_id(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"id": 5, "title": "x"}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_empty_body(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"

    def test_update_null_title(self, client, seed, admin_headers):
        """A null for a required column is a validation error, not a company lookup"""
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"title": None}, headers=admin_headers)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert any("title" in message for message in detail)
        assert not any("company" in message.lower() for message in detail)

    def test_update_null_company_handle(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"companyHandle": None}, headers=admin_headers)

        assert response.status_code == 400
        assert "No company" not in str(response.json()["detail"])

    def test_update_null_salary_allowed(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"salary": None}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["job"]["salary"] is None

    def test_update_salary_too_large(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"salary": 10**19}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_not_found(self, client, seed, admin_headers):
        response = client.patch("/jobs/99999", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404

    def test_update_non_admin(self, client, seed, u1_headers):
        job_id = seed["jobs"]["j1"]
        response = client.patch(f"/jobs/{job_id}", json={"title": "x"}, headers=u1_headers)
        assert response.status_code == 401


class TestJobDeletion:
    """Tests for DELETE /jobs/{id}"""

    def test_delete_job(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j2"]
        response = client.delete(f"/jobs/{job_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": job_id}
        assert client.get(f"/jobs/{job_id}").status_code == 404

    def test_delete_twice(self, client, seed, admin_headers):
        job_id = seed["jobs"]["j2"]
        client.delete(f"/jobs/{job_id}", headers=admin_headers)

        response = client.delete(f"/jobs/{job_id}", headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.parametrize("headers_fixture", ["u1_headers", None])
    def test_delete_requires_admin(self, client, seed, request, headers_fixture):
        headers = request.getfixturevalue(headers_fixture) if headers_fixture else {}
        response = client.delete(f"/jobs/{seed['jobs']['j1']}", headers=headers)
        assert response.status_code == 401
