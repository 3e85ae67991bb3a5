"""Bootstrap a fresh database: tables, the admin account and starter companies.

Run with ``python -m interviewexp.seed``. Safe to run repeatedly.
"""

import logging

from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import Base, SessionLocal, engine
from interviewexp.middleware.auth import hash_password
from interviewexp.models import Company, User

logger = logging.getLogger(__name__)

# (name, slug, category, tier, description)
DEFAULT_COMPANIES = [
    ("Tata Consultancy Services", "tcs", "Service", "Tier 1", "Leading IT services and consulting company"),
    ("Infosys", "infosys", "Service", "Tier 1", "Global leader in next-generation digital services"),
    ("Amazon", "amazon", "Product", "FAANG", "Multinational technology company"),
    ("Microsoft", "microsoft", "Product", "FAANG", "Technology corporation"),
    ("Google", "google", "Product", "FAANG", "Multinational technology company"),
    ("Wipro", "wipro", "Service", "Tier 1", "Information technology services corporation"),
    ("Capgemini", "capgemini", "Service", "Tier 1", "French multinational IT consulting corporation"),
    ("Accenture", "accenture", "Consulting", "Tier 1", "Multinational professional services company"),
    ("IBM", "ibm", "Service", "Tier 1", "International technology corporation"),
    ("Cognizant", "cognizant", "Service", "Tier 1", "American multinational IT services company"),
    ("HCL Technologies", "hcl", "Service", "Tier 2", "Indian multinational IT services company"),
    ("Tech Mahindra", "tech-mahindra", "Service", "Tier 2", "Indian multinational IT services company"),
    ("Flipkart", "flipkart", "Product", "Unicorn", "Indian e-commerce company"),
    ("Paytm", "paytm", "Fintech", "Unicorn", "Indian digital payments company"),
    ("Zomato", "zomato", "Product", "Unicorn", "Indian restaurant aggregator and food delivery company"),
]


def seed_admin(db: Session) -> bool:
    """Create the admin from settings unless that email already exists."""
    email = settings.ADMIN_EMAIL.strip().lower()
    if db.query(User).filter(User.email == email).first():
        logger.info("Admin %s already exists", email)
        return False
    db.add(User(
        name=settings.ADMIN_NAME,
        email=email,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        college=settings.SYSTEM_COLLEGE,
        degree="Administration",
        course="System Administration",
        year="Admin",
        role="admin",
        is_active=True,
        is_verified=True,
    ))
    db.commit()
    logger.info("Created admin %s; change the default password after first login", email)
    return True


def seed_companies(db: Session) -> int:
    """Insert the starter companies only into an empty registry."""
    existing = db.query(Company).count()
    if existing:
        logger.info("%d companies already exist", existing)
        return 0
    for name, slug, category, tier, description in DEFAULT_COMPANIES:
        db.add(Company(name=name, slug=slug, category=category, tier=tier, description=description))
    db.commit()
    logger.info("Created %d default companies", len(DEFAULT_COMPANIES))
    return len(DEFAULT_COMPANIES)


def run(db: Session) -> dict:
    return {"admin_created": seed_admin(db), "companies_created": seed_companies(db)}


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        result = run(session)
    finally:
        session.close()
    logger.info("Seed finished: %s", result)
