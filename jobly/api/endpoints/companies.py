import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import company as company_crud
from jobly.crud.params import parse_companies_query
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
    CompanyDeletedResponse,
)
from jobly.schemas.user import CurrentUser

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """
    Create a company.

    Body: { handle, name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    return {"company": company_crud.create(db, request)}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies ordered by name.

    Optional query filters: name, minEmployees, maxEmployees.
    A minEmployees above maxEmployees is rejected.

    Authorization required: none
    """
    filters = parse_companies_query(request.query_params)
    return {"companies": company_crud.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """
    Partially update a company. Fields can be: { name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """Delete a company. Authorization required: admin"""
    company_crud.remove(db, handle)
    logger.info(f"Admin {admin.username} deleted company {handle}")
    return {"deleted": handle}
