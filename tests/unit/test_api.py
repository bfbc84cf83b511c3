"""
Tests for the HTTP layer: routing, response shapes and error rendering.

Services are wired to the in-memory stores via dependency overrides; the
client is used without its context manager so startup never touches
MongoDB.
"""

from datetime import datetime

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from jobboard.api import create_app
from jobboard.api import dependencies
from jobboard.utils.constants import JobStatus


class FakeDatabaseManager:
    def __init__(self, connected):
        self.connected = connected

    async def check_async_connection(self):
        return self.connected


@pytest.fixture
def app(stores):
    app = create_app()
    app.dependency_overrides[dependencies.listing_service] = stores.listing_service
    app.dependency_overrides[dependencies.relation_service] = stores.relation_service
    app.dependency_overrides[dependencies.dashboard_service] = stores.dashboard_service
    app.dependency_overrides[dependencies.job_service] = stores.job_service
    app.dependency_overrides[dependencies.candidate_service] = stores.candidate_service
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def seeded(stores, make_job, make_candidate):
    candidate = stores.candidates.add(make_candidate())
    job = stores.jobs.add(make_job(title="Platform Engineer", location="Delhi", created_at=datetime(2024, 3, 7)))
    return str(candidate.id), str(job.id)


class TestDashboardRoutes:
    def test_recommended(self, client, seeded):
        candidate_id, job_id = seeded
        response = client.get(f"/recommended/{candidate_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["totalJobs"] == 1
        assert body["currentPage"] == 1
        assert body["jobs"][0]["id"] == job_id
        assert body["jobs"][0]["matchScore"] == 80
        assert body["jobs"][0]["posted"] == "3/7/2024"

    def test_unknown_candidate(self, client):
        response = client.get(f"/recommended/{ObjectId()}")
        assert response.status_code == 404
        assert response.json()["message"] == "Candidate not found"

    def test_bad_page(self, client, seeded):
        response = client.get(f"/recommended/{seeded[0]}", params={"page": "0"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid page or limit"

    def test_malformed_candidate_id(self, client):
        response = client.get("/saved-job/123")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid candidateId"

    def test_search_requires_type(self, client, seeded):
        response = client.get(f"/search/{seeded[0]}", params={"search": "platform"})
        assert response.status_code == 400
        assert response.json()["message"] == "candidateId and type are required"

    def test_search_saved(self, client, stores, seeded):
        candidate_id, job_id = seeded
        stores.saved.add(candidate_id, job_id)

        response = client.get(f"/search/{candidate_id}", params={"search": "platform", "type": "saved"})

        assert response.status_code == 200
        item = response.json()["jobs"][0]
        assert item["matchCount"] == 5
        assert "savedAt" in item

    def test_profile_tasks(self, client, seeded):
        body = client.get(f"/profile-tasks/{seeded[0]}").json()
        assert body["totalTasks"] == 7
        assert body["completedTasks"] == 1
        assert body["completionPercentage"] == 14

    def test_candidate_stats(self, client, seeded):
        body = client.get(f"/candidate-stats/{seeded[0]}").json()
        assert body["jobsApplied"] == 0
        assert body["savedJobsPercentageChange"] == "+0% from last month"


class TestRelationRoutes:
    def test_save_and_status(self, client, seeded):
        candidate_id, job_id = seeded
        response = client.post("/save-jobs", json={"candidateId": candidate_id, "jobId": job_id})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Job saved successfully"
        assert body["savedJob"]["candidateId"] == candidate_id
        assert client.get(f"/save-jobs/status/{candidate_id}/{job_id}").json() == {"saved": 1}

    def test_duplicate_save(self, client, seeded):
        payload = {"candidateId": seeded[0], "jobId": seeded[1]}
        client.post("/save-jobs", json=payload)

        response = client.post("/save-jobs", json=payload)

        assert response.status_code == 409
        assert response.json() == {"message": "You have already saved this job"}

    def test_save_missing_fields(self, client):
        response = client.post("/save-jobs", json={"candidateId": str(ObjectId())})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    def test_unsave(self, client, stores, seeded):
        candidate_id, job_id = seeded
        stores.saved.add(candidate_id, job_id)

        response = client.delete(f"/save-jobs/{candidate_id}/{job_id}")

        assert response.json() == {"message": "Job removed from saved jobs"}
        assert client.get(f"/save-jobs/status/{candidate_id}/{job_id}").json() == {"saved": 0}

    def test_unsave_missing(self, client, seeded):
        response = client.delete(f"/save-jobs/{seeded[0]}/{seeded[1]}")
        assert response.status_code == 404

    def test_apply_then_status_change(self, client, seeded):
        candidate_id, job_id = seeded
        created = client.post("/apply-job", json={"candidateId": candidate_id, "jobId": job_id})
        assert created.status_code == 201
        assert created.json()["application"]["status"] == "new"
        assert client.get(f"/apply-job/status/{candidate_id}/{job_id}").json() == {"applied": 1}

        response = client.patch(f"/apply-job/{candidate_id}/{job_id}/status", json={"status": "interview"})

        assert response.status_code == 200
        assert response.json()["application"]["status"] == "interview"

    def test_unknown_application_status(self, client, seeded):
        response = client.patch(f"/apply-job/{seeded[0]}/{seeded[1]}/status", json={"status": "promoted"})
        assert response.status_code == 400


class TestJobRoutes:
    def test_browse(self, client, seeded):
        response = client.get("/jobs", params={"title": "platform", "keySkills": "java,go"})

        assert response.status_code == 200
        body = response.json()
        assert body["totalJobs"] == 1
        assert body["jobs"][0]["companyName"] == "Acme"

    def test_browse_page_beyond_range(self, client, seeded):
        response = client.get("/jobs", params={"page": "9" * 25})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid page or limit"

    def test_browse_bad_experience(self, client):
        response = client.get("/jobs", params={"minMaxExp": "lots"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid experience filter"

    def test_filters(self, client, seeded):
        body = client.get("/jobs/filters").json()
        assert body["locations"] == [{"value": "Delhi", "count": 1}]
        assert "jobTypes" in body

    def test_create(self, client, stores):
        payload = {
            "title": "data analyst",
            "companyName": "globex",
            "location": "pune",
            "salaryRange": "400000-600000",
            "minExp": 0,
            "maxExp": 2,
            "industryType": "analytics",
            "keySkills": ["sql", "excel"],
        }
        response = client.post("/jobs", json=payload)

        assert response.status_code == 201
        job = response.json()["job"]
        assert job["title"] == "Data Analyst"
        assert job["companyName"] == "Globex"
        assert len(stores.jobs.jobs) == 1

    def test_create_inverted_band(self, client):
        payload = {
            "title": "x",
            "companyName": "y",
            "location": "z",
            "salaryRange": "1-2",
            "minExp": 5,
            "maxExp": 1,
            "industryType": "it",
        }
        assert client.post("/jobs", json=payload).status_code == 400

    def test_get_and_delete(self, client, stores, seeded):
        job_id = seeded[1]
        assert client.get(f"/jobs/{job_id}").json()["title"] == "Platform Engineer"

        response = client.delete(f"/jobs/{job_id}")

        assert response.json()["message"] == "Job marked as In-Active"
        assert stores.jobs.jobs[ObjectId(job_id)].status == JobStatus.INACTIVE.value

    def test_status_toggle(self, client, seeded):
        response = client.patch(f"/jobs/{seeded[1]}/status", json={"status": "In-Active"})
        assert response.json()["message"] == "Job deactivated successfully"

        response = client.patch(f"/jobs/{seeded[1]}/status", json={"status": "Active"})
        assert response.json()["message"] == "Job activated successfully"

    def test_unknown_job(self, client):
        response = client.get(f"/jobs/{ObjectId()}")
        assert response.status_code == 404


class TestCandidateRoutes:
    def test_get(self, client, seeded):
        body = client.get(f"/candidates/{seeded[0]}").json()
        assert body["id"] == seeded[0]
        assert body["fullName"] == "Asha Rao"
        assert body["preferredLocation"] == "Delhi"

    def test_update(self, client, seeded):
        response = client.put(f"/candidates/{seeded[0]}", json={"preferredLocation": "Pune", "skills": ["Go"]})

        assert response.status_code == 200
        candidate = response.json()["candidate"]
        assert candidate["preferredLocation"] == "Pune"
        assert candidate["skills"] == ["Go"]


class TestAdminRoutes:
    def test_candidate_list(self, client, stores, make_candidate):
        stores.candidates.add(make_candidate(full_name="Asha Rao", city="Pune"))
        stores.candidates.add(make_candidate(full_name="Ravi Kumar", city="Delhi"))

        response = client.get("/candidates", params=[("city", "Pune"), ("city", "Mumbai")])

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Candidates retrieved successfully"
        assert [c["fullName"] for c in body["candidates"]] == ["Asha Rao"]
        assert body["pagination"]["totalCandidates"] == 1

    def test_candidate_list_bad_band(self, client):
        response = client.get("/candidates", params={"experience": "forever"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid experience filter"

    def test_candidate_status(self, client, seeded):
        response = client.patch(f"/candidates/{seeded[0]}/status", json={"status": "In-Active"})

        assert response.status_code == 200
        assert response.json()["message"] == "Candidate deactivated successfully"
        assert response.json()["candidate"]["status"] == "In-Active"

    def test_admin_panel(self, client, stores, make_job, seeded):
        stores.jobs.add(make_job(title="Closed", status=JobStatus.INACTIVE))

        active = client.get("/jobs/admin-panel").json()
        inactive = client.get("/jobs/admin-panel", params={"status": "In-Active", "limit": "5"}).json()

        assert active["totalJobs"] == 1
        assert active["jobs"][0]["id"] == seeded[1]
        assert inactive["message"] == "Jobs fetched successfully"
        assert [job["title"] for job in inactive["jobs"]] == ["Closed"]

    def test_admin_panel_bad_offset(self, client):
        response = client.get("/jobs/admin-panel", params={"offset": "-3"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid offset or limit"

    def test_industry_stats(self, client, stores, make_job):
        stores.jobs.add(make_job(industry_type="IT"))
        stores.jobs.add(make_job(industry_type="IT", status=JobStatus.INACTIVE))

        assert client.get("/jobs/industry-stats").json() == [{"industryType": "IT", "count": 2}]

    def test_applications(self, client, stores, seeded):
        candidate_id, job_id = seeded
        stores.applied.add(candidate_id, job_id)

        body = client.get("/apply-job/applications").json()

        assert body["totalApplications"] == 1
        row = body["applications"][0]
        assert row["status"] == "new"
        assert row["candidate"]["fullName"] == "Asha Rao"
        assert row["job"]["title"] == "Platform Engineer"
        assert row["job"]["postedAt"] == "7 March 2024"


class TestHealth:
    @pytest.mark.parametrize("connected, status", [(True, "ok"), (False, "degraded")])
    def test_health(self, app, connected, status):
        app.dependency_overrides[dependencies.database_manager] = lambda: FakeDatabaseManager(connected)
        body = TestClient(app).get("/health").json()
        assert body["status"] == status
        assert body["database"] == ("connected" if connected else "unavailable")


class BrokenCandidateService:
    async def get(self, candidate_id):
        raise RuntimeError("unexpected")


class TestErrorRendering:
    def test_unexpected_error_is_structured(self, app):
        app.dependency_overrides[dependencies.candidate_service] = BrokenCandidateService
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get(f"/candidates/{ObjectId()}")

        assert response.status_code == 500
        assert response.json() == {"message": "Server error", "details": "RuntimeError"}

    def test_free_text_email_does_not_break_listings(self, client, stores, make_candidate):
        candidate = stores.candidates.add(make_candidate(email="asha at example"))

        response = client.get(f"/recommended/{candidate.id}")

        assert response.status_code == 200
        assert response.json()["totalJobs"] == 0
