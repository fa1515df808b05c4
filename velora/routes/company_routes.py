from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from velora.database import get_db
from velora.services.auth_service import AuthService
from velora.schemas.company_schemas import CompanyLogin, CompanyLoginResponse

router = APIRouter()


@router.post("/login", response_model=CompanyLoginResponse)
def login(data: CompanyLogin, db: Session = Depends(get_db)):
    """
    Company login.

    The returned token carries the company's db_name; every tenant-scoped
    request is routed to that database.
    """
    return AuthService(db).login_company(data)
