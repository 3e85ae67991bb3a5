"""Tests for experience submission, browsing, edits and reactions."""


class TestSubmission:
    """POST /api/experiences."""

    def test_submission_starts_pending(self, client, register, submit, company):
        """Every new experience waits for moderation, titled 'Company - Role'."""
        _, headers, _ = register()
        experience = submit(headers)
        assert experience["status"] == "pending"
        assert experience["title"] == "Google - SDE Intern"
        assert experience["company"]["id"] == company.id
        assert experience["views_count"] == 0

    def test_requires_auth(self, client, company):
        resp = client.post("/api/experiences", json={
            "companyId": company.id,
            "role": "SDE",
            "experienceType": "Full-Time",
            "result": "Pending",
        })
        assert resp.status_code == 401

    def test_custom_company_created_then_reused(self, client, register):
        """'other' + a free-text name creates the company once; case variants reuse it."""
        _, headers, _ = register()
        body = {
            "companyId": "other",
            "customCompany": "Acme Corp",
            "role": "Analyst",
            "experienceType": "Full-Time",
            "result": "Pending",
        }
        first = client.post("/api/experiences", json=body, headers=headers)
        assert first.status_code == 201
        data = first.json()["data"]
        assert data["company_created"] is True
        assert data["company"]["slug"] == "acme-corp"

        second = client.post(
            "/api/experiences", json={**body, "customCompany": "ACME CORP"}, headers=headers
        )
        assert second.status_code == 201
        data2 = second.json()["data"]
        assert data2["company_created"] is False
        assert data2["company"]["id"] == data["company"]["id"]

    def test_custom_company_name_required(self, client, register):
        _, headers, _ = register()
        resp = client.post("/api/experiences", json={
            "companyId": "other",
            "customCompany": "   ",
            "role": "Analyst",
            "experienceType": "Full-Time",
            "result": "Pending",
        }, headers=headers)
        assert resp.status_code == 400

    def test_unknown_company_id(self, client, register):
        _, headers, _ = register()
        resp = client.post("/api/experiences", json={
            "companyId": "does-not-exist",
            "role": "Analyst",
            "experienceType": "Full-Time",
            "result": "Pending",
        }, headers=headers)
        assert resp.status_code == 404

    def test_bad_experience_type(self, client, register, company):
        _, headers, _ = register()
        resp = client.post("/api/experiences", json={
            "companyId": company.id,
            "role": "Analyst",
            "experienceType": "Contract",
            "result": "Pending",
        }, headers=headers)
        assert resp.status_code == 400


class TestVisibility:
    """Who can see what."""

    def test_pending_hidden_from_others(self, client, register, submit):
        """Pending rows are visible to their author only (and admins)."""
        _, author_headers, _ = register(email="a@uni.edu")
        _, other_headers, _ = register(email="b@uni.edu")
        experience = submit(author_headers)

        assert client.get(f"/api/experiences/{experience['id']}", headers=author_headers).status_code == 200
        assert client.get(f"/api/experiences/{experience['id']}", headers=other_headers).status_code == 404
        assert client.get(f"/api/experiences/{experience['id']}").status_code == 404

    def test_public_list_only_approved(self, client, register, submit, approved):
        _, headers, _ = register()
        submit(headers, role="Pending Role")
        approved(headers, role="Approved Role")
        resp = client.get("/api/experiences")
        assert resp.status_code == 200
        data = resp.json()["data"]
        roles = [e["role"] for e in data["experiences"]]
        assert roles == ["Approved Role"]
        assert data["pagination"]["total_items"] == 1
        assert data["pagination"]["current_page"] == 1

    def test_list_scoped_to_viewer_college(self, client, register, approved):
        """Signed-in students only see experiences from their own college."""
        _, state_headers, _ = register(email="s@uni.edu", college="State University")
        _, tech_headers, _ = register(email="t@uni.edu", college="Tech Institute")
        approved(state_headers, role="State Role")
        approved(tech_headers, role="Tech Role")

        as_state = client.get("/api/experiences", headers=state_headers).json()["data"]["experiences"]
        assert [e["role"] for e in as_state] == ["State Role"]
        anonymous = client.get("/api/experiences").json()["data"]["experiences"]
        assert len(anonymous) == 2

    def test_filter_by_company_slug(self, client, register, approved):
        _, headers, _ = register()
        approved(headers)
        approved(headers, companyId="other", customCompany="Acme Corp")
        resp = client.get("/api/experiences", params={"company": "acme-corp"})
        experiences = resp.json()["data"]["experiences"]
        assert len(experiences) == 1
        assert experiences[0]["company"]["slug"] == "acme-corp"


class TestViews:
    """View counting on GET /api/experiences/{id}."""

    def test_views_count_for_others_not_author(self, client, register, approved):
        _, author_headers, _ = register(email="a@uni.edu")
        _, reader_headers, _ = register(email="b@uni.edu")
        experience = approved(author_headers)

        client.get(f"/api/experiences/{experience['id']}", headers=author_headers)
        client.get(f"/api/experiences/{experience['id']}", headers=reader_headers)
        resp = client.get(f"/api/experiences/{experience['id']}")
        assert resp.json()["data"]["experience"]["views_count"] == 2


class TestEdits:
    """PUT and DELETE /api/experiences/{id}."""

    def test_author_edits_pending(self, client, register, submit):
        _, headers, _ = register()
        experience = submit(headers)
        resp = client.put(
            f"/api/experiences/{experience['id']}",
            json={"role": "SDE II", "tipsAndAdvice": "Practice graphs."},
            headers=headers,
        )
        assert resp.status_code == 200
        updated = resp.json()["data"]["experience"]
        assert updated["role"] == "SDE II"
        assert updated["tips_and_advice"] == "Practice graphs."
        assert updated["status"] == "pending"

    def test_cannot_edit_after_approval(self, client, register, approved):
        _, headers, _ = register()
        experience = approved(headers)
        resp = client.put(f"/api/experiences/{experience['id']}", json={"role": "X"}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid Status"

    def test_only_author_edits(self, client, register, submit):
        _, author_headers, _ = register(email="a@uni.edu")
        _, other_headers, _ = register(email="b@uni.edu")
        experience = submit(author_headers)
        resp = client.put(f"/api/experiences/{experience['id']}", json={"role": "X"}, headers=other_headers)
        assert resp.status_code == 403

    def test_delete_by_author(self, client, register, submit):
        _, headers, _ = register()
        experience = submit(headers)
        assert client.delete(f"/api/experiences/{experience['id']}", headers=headers).status_code == 200
        assert client.get(f"/api/experiences/{experience['id']}", headers=headers).status_code == 404

    def test_delete_by_stranger_forbidden(self, client, register, submit):
        _, author_headers, _ = register(email="a@uni.edu")
        _, other_headers, _ = register(email="b@uni.edu")
        experience = submit(author_headers)
        resp = client.delete(f"/api/experiences/{experience['id']}", headers=other_headers)
        assert resp.status_code == 403


class TestReactions:
    """Likes and bookmarks."""

    def test_like_toggles(self, client, register, approved):
        """Liking twice returns the count to where it started."""
        _, headers, _ = register()
        experience = approved(headers)
        url = f"/api/experiences/{experience['id']}/like"

        first = client.post(url, headers=headers).json()["data"]
        assert first == {"liked": True, "bookmarked": None, "likes_count": 1}
        second = client.post(url, headers=headers).json()["data"]
        assert second["liked"] is False
        assert second["likes_count"] == 0

    def test_like_pending_is_not_found(self, client, register, submit):
        _, headers, _ = register()
        experience = submit(headers)
        resp = client.post(f"/api/experiences/{experience['id']}/like", headers=headers)
        assert resp.status_code == 404

    def test_viewer_flags_and_bookmarks_list(self, client, register, approved):
        _, headers, _ = register()
        experience = approved(headers)
        client.post(f"/api/experiences/{experience['id']}/like", headers=headers)
        resp = client.post(f"/api/experiences/{experience['id']}/bookmark", headers=headers)
        assert resp.json()["data"]["bookmarked"] is True

        detail = client.get(f"/api/experiences/{experience['id']}", headers=headers).json()["data"]["experience"]
        assert detail["is_liked"] is True
        assert detail["is_bookmarked"] is True

        bookmarks = client.get("/api/users/me/bookmarks", headers=headers).json()["data"]
        assert [e["id"] for e in bookmarks["experiences"]] == [experience["id"]]
