import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from jobswipe.db.session import get_db
from jobswipe.errors import InvalidInput, Unexpected
from jobswipe.models.company import Company
from jobswipe.models.user import User
from jobswipe.schemas.company import CompanyCreate
from jobswipe.security.deps import require_recruiter
from jobswipe.services.jobs import slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_company(
    body: CompanyCreate,
    db: Session = Depends(get_db),
    recruiter: User = Depends(require_recruiter),
):
    """
    Creates the recruiter's company profile and makes them its owner.
    """
    if recruiter.company_id is not None:
        raise InvalidInput("You already belong to a company.")

    try:
        company = Company(
            name=body.name.strip(),
            slug=slugify(body.name),
            industry=body.industry,
            size=body.size,
            logo_url=body.logo_url,
            owner_id=recruiter.id,
        )
        db.add(company)
        db.flush()

        recruiter.company_id = company.id
        db.commit()
        db.refresh(company)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error creating company for recruiter {recruiter.id}")
        raise Unexpected()

    return {
        "message": "Company created successfully.",
        "company": {
            "id": str(company.id),
            "name": company.name,
            "slug": company.slug,
            "industry": company.industry,
            "size": company.size,
            "logo_url": company.logo_url,
        },
    }
