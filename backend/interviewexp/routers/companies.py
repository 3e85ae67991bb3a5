"""Companies router — catalog browsing and admin seeding."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.middleware.auth import require_admin
from interviewexp.models.user import User
from interviewexp.routers.responses import company_to_response
from interviewexp.schemas.common import Pagination, envelope
from interviewexp.schemas.company import CompanyCreate
from interviewexp.services import company_service

router = APIRouter(prefix="/api/companies", tags=["companies"])


@router.get("")
def list_companies(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    tier: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    companies, total = company_service.list_companies(
        db, page=page, limit=limit, tier=tier, category=category, search=search
    )
    counts = company_service.approved_experience_counts(db, [c.id for c in companies])
    return envelope({
        "companies": [company_to_response(c, counts.get(c.id, 0)) for c in companies],
        "pagination": Pagination.build(page, limit, total),
    })


@router.get("/slug/{slug}")
def get_company_by_slug(slug: str, db: Session = Depends(get_db)):
    company = company_service.get_company_by_slug(db, slug)
    counts = company_service.approved_experience_counts(db, [company.id])
    return envelope({"company": company_to_response(company, counts.get(company.id, 0))})


@router.get("/{company_id}")
def get_company(company_id: str, db: Session = Depends(get_db)):
    company = company_service.get_company(db, company_id)
    counts = company_service.approved_experience_counts(db, [company.id])
    return envelope({"company": company_to_response(company, counts.get(company.id, 0))})


@router.post("", status_code=201)
def create_company(
    req: CompanyCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Add a company to the registry (admin only). Names are unique ignoring case."""
    company = company_service.add_company(
        db,
        req.name,
        tier=req.tier,
        category=req.category,
        description=req.description,
        website=req.website,
        logo_url=req.logo_url,
    )
    return envelope({"company": company_to_response(company)}, message="Company created")
