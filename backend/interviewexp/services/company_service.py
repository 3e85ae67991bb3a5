"""Company service — registry lookups and lazy creation from free text."""

import logging
import re
import uuid
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from interviewexp.errors import ConflictError, NotFoundError, ValidationError
from interviewexp.models.company import Company
from interviewexp.models.experience import Experience
from interviewexp.services.pagination import paginate

logger = logging.getLogger(__name__)

OTHER_COMPANY_ID = "other"

# Placeholders for companies created from a user's free-text entry
USER_COMPANY_CATEGORY = "Other"
USER_COMPANY_TIER = "Unspecified"
USER_COMPANY_DESCRIPTION = "Company added by user"


def slugify(name: str) -> str:
    """Derive a URL-safe slug: ``"Acme  Corp!"`` -> ``"acme-corp"``."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def find_by_name(db: Session, name: str) -> Optional[Company]:
    """Case-insensitive exact-name match."""
    return (
        db.query(Company)
        .filter(func.lower(Company.name) == name.strip().lower())
        .order_by(Company.created_at.asc())
        .first()
    )


def create_company(
    db: Session,
    name: str,
    tier: str = USER_COMPANY_TIER,
    category: str = USER_COMPANY_CATEGORY,
    description: Optional[str] = None,
    website: Optional[str] = None,
    logo_url: Optional[str] = None,
) -> Company:
    """Add a company row (flushed, not committed)."""
    name = name.strip()
    slug = slugify(name) or f"company-{uuid.uuid4().hex[:8]}"
    company = Company(
        id=str(uuid.uuid4()),
        name=name,
        slug=slug,
        tier=tier,
        category=category,
        description=description,
        website=website,
        logo_url=logo_url,
    )
    db.add(company)
    db.flush()
    logger.info("Created company %s (slug=%s)", name, slug)
    return company


def get_or_create_company(
    db: Session, company_id: str, custom_name: Optional[str] = None
) -> tuple[Company, bool]:
    """Resolve a submission's company.

    ``company_id == "other"`` means the user typed a name: an existing company
    with the same name (ignoring case) is reused, otherwise a new one is
    created with placeholder tier/category. Returns ``(company, created)``.
    """
    if company_id == OTHER_COMPANY_ID:
        if not custom_name or not custom_name.strip():
            raise ValidationError("Company name is required")
        existing = find_by_name(db, custom_name)
        if existing:
            return existing, False
        company = create_company(
            db,
            custom_name,
            tier=USER_COMPANY_TIER,
            category=USER_COMPANY_CATEGORY,
            description=USER_COMPANY_DESCRIPTION,
        )
        return company, True

    company = db.query(Company).filter(Company.id == company_id, Company.is_active.is_(True)).first()
    if not company:
        raise NotFoundError("Company not found")
    return company, False


def get_company(db: Session, company_id: str) -> Company:
    company = db.query(Company).filter(Company.id == company_id, Company.is_active.is_(True)).first()
    if not company:
        raise NotFoundError("Company not found")
    return company


def get_company_by_slug(db: Session, slug: str) -> Company:
    company = (
        db.query(Company)
        .filter(Company.slug == slug, Company.is_active.is_(True))
        .order_by(Company.created_at.asc())
        .first()
    )
    if not company:
        raise NotFoundError("Company not found")
    return company


def list_companies(
    db: Session,
    page: int,
    limit: int,
    tier: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> tuple[list[Company], int]:
    query = db.query(Company).filter(Company.is_active.is_(True))
    if tier:
        query = query.filter(Company.tier == tier)
    if category:
        query = query.filter(Company.category == category)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Company.name.ilike(pattern), Company.category.ilike(pattern)))
    return paginate(query.order_by(Company.name.asc()), page, limit)


def approved_experience_counts(db: Session, company_ids: list[str]) -> dict[str, int]:
    """Map company id -> number of approved experiences."""
    if not company_ids:
        return {}
    rows = (
        db.query(Experience.company_id, func.count(Experience.id))
        .filter(Experience.company_id.in_(company_ids), Experience.status == "approved")
        .group_by(Experience.company_id)
        .all()
    )
    return {company_id: count for company_id, count in rows}


def add_company(db: Session, name: str, **fields) -> Company:
    """Admin seeding path: refuses names already registered (ignoring case)."""
    if find_by_name(db, name):
        raise ConflictError("A company with this name already exists")
    company = create_company(db, name, **fields)
    db.commit()
    db.refresh(company)
    return company
