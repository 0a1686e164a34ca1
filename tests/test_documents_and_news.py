"""
Public content tests
====================

Documents and news are readable without a session, but only once
PUBLISHED.  Staff see drafts too.
"""

import pytest

DOCUMENT = {
    "title": "Motor Policy Wording",
    "description": "Full terms and conditions of the comprehensive motor cover.",
    "category": "Policies",
    "fileUrl": "https://media.test/documents/motor.pdf",
    "fileSize": 1048576,
    "fileType": "application/pdf",
}

ARTICLE = {
    "title": "MOHA opens a new branch in Dodoma",
    "content": "Customers in the capital can now lodge claims and buy cover at our new Dodoma office.",
    "category": "Company",
}


@pytest.fixture
def publish_document(client, staff_headers):
    def _create(**overrides):
        resp = client.post("/api/documents", json={**DOCUMENT, **overrides}, headers=staff_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create


@pytest.fixture
def write_article(client, staff_headers):
    def _create(**overrides):
        resp = client.post("/api/news", json={**ARTICLE, **overrides}, headers=staff_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create


class TestDocuments:
    def test_create_records_uploader(self, publish_document, staff):
        doc = publish_document()
        assert doc["uploadedBy"] == "Staff Member"
        assert doc["uploaderId"] == staff.id
        assert doc["fileSize"] == "1048576"
        assert doc["status"] == "PUBLISHED"
        assert doc["downloads"] == 0

    def test_create_requires_session(self, client):
        assert client.post("/api/documents", json=DOCUMENT).status_code == 401

    def test_short_title(self, client, staff_headers):
        resp = client.post("/api/documents", json={**DOCUMENT, "title": "ab"}, headers=staff_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Title must be at least 3 characters long"

    def test_drafts_hidden_from_visitors(self, client, publish_document, staff_headers):
        public = publish_document(title="Claim Form")
        draft = publish_document(title="Unreleased Report", status="DRAFT")

        listed = client.get("/api/documents").json()["data"]["documents"]
        assert [d["id"] for d in listed] == [public["id"]]
        assert client.get(f"/api/documents/{draft['id']}").status_code == 404

        staff_view = client.get("/api/documents", headers=staff_headers).json()["data"]
        assert staff_view["pagination"]["total"] == 2
        drafts = client.get("/api/documents?status=DRAFT", headers=staff_headers).json()["data"]["documents"]
        assert [d["id"] for d in drafts] == [draft["id"]]

    def test_visitor_status_filter_is_ignored(self, client, publish_document):
        publish_document(status="DRAFT")
        listed = client.get("/api/documents?status=DRAFT").json()["data"]["documents"]
        assert listed == []

    def test_category_filter(self, client, publish_document):
        publish_document(category="Forms")
        publish_document(category="Policies")
        forms = client.get("/api/documents?category=Forms").json()["data"]["documents"]
        assert [d["category"] for d in forms] == ["Forms"]

    def test_download_counter(self, client, publish_document):
        doc = publish_document()
        client.patch(f"/api/documents/{doc['id']}")
        resp = client.patch(f"/api/documents/{doc['id']}")
        assert resp.status_code == 200
        assert resp.json()["data"]["downloads"] == 2

    def test_update_listing(self, client, publish_document, staff_headers):
        doc = publish_document()
        resp = client.put(
            f"/api/documents/{doc['id']}",
            json={"status": "DRAFT", "category": "Archive"},
            headers=staff_headers,
        )
        data = resp.json()["data"]
        assert data["status"] == "DRAFT"
        assert data["category"] == "Archive"
        assert data["title"] == DOCUMENT["title"]

    def test_empty_update_is_rejected(self, client, publish_document, staff_headers):
        doc = publish_document()
        resp = client.put(f"/api/documents/{doc['id']}", json={}, headers=staff_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "No fields to update"

    def test_delete(self, client, publish_document, admin_headers):
        doc = publish_document()
        assert client.delete(f"/api/documents/{doc['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/documents/{doc['id']}").status_code == 404


class TestNews:
    def test_new_article_is_draft(self, write_article):
        article = write_article()
        assert article["status"] == "DRAFT"
        assert article["author"] == "Staff Member"

    def test_short_content(self, client, staff_headers):
        resp = client.post("/api/news", json={**ARTICLE, "content": "Too short."}, headers=staff_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Content must be at least 50 characters long"

    def test_drafts_hidden_from_visitors(self, client, write_article):
        draft = write_article()
        assert client.get("/api/news").json()["data"]["news"] == []
        resp = client.get(f"/api/news/{draft['id']}")
        assert resp.status_code == 404
        assert resp.json()["error"] == "News article not found"

    def test_publishing_moves_article_to_top(self, client, write_article, staff_headers):
        draft = write_article(title="Draft written first")
        live = write_article(title="Published straight away", status="PUBLISHED")

        before = client.get("/api/news").json()["data"]["news"]
        assert [a["id"] for a in before] == [live["id"]]

        resp = client.patch(f"/api/news/{draft['id']}", json={"status": "PUBLISHED"}, headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["publishedDate"] != draft["publishedDate"]

        after = client.get("/api/news").json()["data"]["news"]
        assert [a["id"] for a in after] == [draft["id"], live["id"]]

    def test_staff_can_read_draft(self, client, write_article, staff_headers):
        draft = write_article()
        assert client.get(f"/api/news/{draft['id']}", headers=staff_headers).status_code == 200

    def test_empty_patch(self, client, write_article, staff_headers):
        article = write_article()
        resp = client.patch(f"/api/news/{article['id']}", json={}, headers=staff_headers)
        assert resp.status_code == 400

    def test_delete_requires_admin(self, client, write_article, staff_headers, admin_headers):
        article = write_article()
        assert client.delete(f"/api/news/{article['id']}", headers=staff_headers).status_code == 403
        resp = client.delete(f"/api/news/{article['id']}", headers=admin_headers)
        assert resp.json()["data"]["message"] == "News article deleted successfully"
