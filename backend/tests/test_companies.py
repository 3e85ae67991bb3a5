"""Tests for slugs, company lookup and the companies API."""

import pytest

from interviewexp.errors import NotFoundError, ValidationError
from interviewexp.models import Company
from interviewexp.services import company_service
from interviewexp.services.company_service import slugify


class TestSlugify:
    """Slug derivation from display names."""

    @pytest.mark.parametrize("name,expected", [
        ("Acme Corp", "acme-corp"),
        ("  Acme   Corp!  ", "acme-corp"),
        ("AT&T", "att"),
        ("Tech -- Mahindra", "tech-mahindra"),
        ("Zoho", "zoho"),
    ])
    def test_slugify(self, name, expected):
        assert slugify(name) == expected

    def test_symbols_only_is_empty(self):
        assert slugify("!!!") == ""


class TestGetOrCreate:
    """get_or_create_company against the database."""

    def test_existing_id(self, db, company):
        found, created = company_service.get_or_create_company(db, company.id)
        assert found.id == company.id
        assert created is False

    def test_case_insensitive_reuse(self, db):
        first, created = company_service.get_or_create_company(db, "other", "Acme Corp")
        db.commit()
        assert created is True
        assert first.tier == "Unspecified"
        assert first.category == "Other"

        again, created_again = company_service.get_or_create_company(db, "other", "  acme corp ")
        assert created_again is False
        assert again.id == first.id

    def test_symbol_name_gets_generated_slug(self, db):
        company, _ = company_service.get_or_create_company(db, "other", "!!!")
        assert company.slug.startswith("company-")

    def test_blank_custom_name(self, db):
        with pytest.raises(ValidationError):
            company_service.get_or_create_company(db, "other", "")

    def test_unknown_id(self, db):
        with pytest.raises(NotFoundError):
            company_service.get_or_create_company(db, "missing")

    def test_deactivated_company_takes_no_submissions(self, db, company):
        company.is_active = False
        db.commit()
        with pytest.raises(NotFoundError):
            company_service.get_or_create_company(db, company.id)


class TestCompaniesApi:
    """/api/companies endpoints."""

    def test_list_with_experience_counts(self, client, register, approved, submit, company):
        _, headers, _ = register()
        approved(headers)
        submit(headers)

        data = client.get("/api/companies").json()["data"]
        assert [c["slug"] for c in data["companies"]] == ["google"]
        assert data["companies"][0]["experience_count"] == 1
        assert data["pagination"]["total_items"] == 1

    def test_lookup_by_slug_and_id(self, client, company):
        by_slug = client.get("/api/companies/slug/google")
        assert by_slug.status_code == 200
        assert by_slug.json()["data"]["company"]["id"] == company.id
        by_id = client.get(f"/api/companies/{company.id}")
        assert by_id.json()["data"]["company"]["name"] == "Google"
        assert client.get("/api/companies/slug/nope").status_code == 404

    def test_inactive_company_hidden(self, client, db):
        db.add(Company(name="Gone", slug="gone", is_active=False))
        db.commit()
        assert client.get("/api/companies/slug/gone").status_code == 404
        assert client.get("/api/companies").json()["data"]["companies"] == []

    def test_admin_creates_company(self, client, admin):
        _, admin_headers = admin
        resp = client.post(
            "/api/companies", json={"name": "Zoho Corp", "tier": "Tier 2", "category": "Product"},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["company"]["slug"] == "zoho-corp"

        dup = client.post("/api/companies", json={"name": "ZOHO CORP"}, headers=admin_headers)
        assert dup.status_code == 409

    def test_student_cannot_create_company(self, client, register):
        _, headers, _ = register()
        assert client.post("/api/companies", json={"name": "Nope"}, headers=headers).status_code == 403
