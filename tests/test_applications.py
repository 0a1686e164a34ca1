"""
Job application endpoint tests.
"""

import pytest

APPLICATION = {
    "applicantName": "Rehema Said",
    "email": "rehema@example.com",
    "phone": "+255754000111",
    "position": "Underwriter",
    "experience": "4 years underwriting motor and property risks",
    "education": "BSc Actuarial Science",
    "expectedSalary": 1800000,
    "availableFrom": "2026-01-05T00:00:00Z",
    "coverLetter": "I would like to join MOHA as an underwriter because I enjoy pricing risk carefully.",
    "skills": ["Excel", " ", "Risk pricing"],
}


@pytest.fixture
def application(client):
    resp = client.post("/api/applications", json=APPLICATION)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestApply:
    def test_public_create(self, application):
        assert application["status"] == "NEW"
        assert application["expectedSalary"] == "1800000"
        assert application["skills"] == ["Excel", "Risk pricing"]

    def test_short_cover_letter(self, client):
        resp = client.post("/api/applications", json={**APPLICATION, "coverLetter": "Hire me please."})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Cover letter must be at least 50 characters long"

    def test_missing_education(self, client):
        resp = client.post("/api/applications", json={**APPLICATION, "education": ""})
        assert resp.status_code == 400


class TestReview:
    def test_schedule_interview(self, client, application, staff_headers):
        resp = client.patch(
            f"/api/applications/{application['id']}",
            json={
                "status": "INTERVIEW_SCHEDULED",
                "interviewDate": "2026-01-12T09:00:00Z",
                "interviewNotes": "Panel: HR and Head of Underwriting",
            },
            headers=staff_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == "INTERVIEW_SCHEDULED"
        assert data["interviewNotes"] == "Panel: HR and Head of Underwriting"

    def test_submission_fields_are_not_editable(self, client, application, staff_headers):
        resp = client.patch(
            f"/api/applications/{application['id']}",
            json={"applicantName": "Someone Else", "status": "IN_REVIEW"},
            headers=staff_headers,
        )
        assert resp.json()["data"]["applicantName"] == "Rehema Said"

    def test_empty_patch(self, client, application, staff_headers):
        resp = client.patch(f"/api/applications/{application['id']}", json={}, headers=staff_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "No fields to update"

    def test_invalid_status(self, client, application, staff_headers):
        resp = client.patch(
            f"/api/applications/{application['id']}", json={"status": "HIRED"}, headers=staff_headers
        )
        assert resp.status_code == 400

    def test_position_filter(self, client, application, staff_headers):
        client.post("/api/applications", json={**APPLICATION, "position": "Claims Officer"})
        data = client.get("/api/applications?position=Underwriter", headers=staff_headers).json()["data"]
        assert [a["id"] for a in data["applications"]] == [application["id"]]

    def test_delete(self, client, application, staff_headers, admin_headers):
        path = f"/api/applications/{application['id']}"
        assert client.delete(path, headers=staff_headers).status_code == 403
        assert client.delete(path, headers=admin_headers).status_code == 200
        assert client.get(path, headers=admin_headers).status_code == 404
