from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class CompanyCreate(BaseModel):
    """Create a company; its tenant database is provisioned in the same request"""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=6, max_length=72)
    is_active: bool = True
    phone: Optional[str] = Field(None, max_length=50)
    logo: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=1000)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    pin_code: Optional[str] = Field(None, max_length=20)
    gst_number: Optional[str] = Field(None, max_length=20)


class CompanyUpdate(BaseModel):
    """Update company details. db_name is immutable and not accepted here."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    is_active: Optional[bool] = None
    phone: Optional[str] = Field(None, max_length=50)
    logo: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=1000)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    pin_code: Optional[str] = Field(None, max_length=20)
    gst_number: Optional[str] = Field(None, max_length=20)


class CompanyResponse(BaseModel):
    """Company details as seen by its admin"""

    id: str
    email: str
    name: str
    is_active: bool
    phone: Optional[str]
    logo: Optional[str]
    address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    country: Optional[str]
    pin_code: Optional[str]
    gst_number: Optional[str]
    db_name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CompanyDeleteResponse(BaseModel):
    message: str


class CompanyLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class CompanySummary(BaseModel):
    id: str
    email: str
    name: str
    is_active: bool

    model_config = {"from_attributes": True}


class CompanyLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    company: CompanySummary


class MigrationResultResponse(BaseModel):
    """Outcome for one tenant database"""

    db_name: str
    from_version: int
    to_version: int
    applied: list[int]
    error: Optional[str]

    model_config = {"from_attributes": True}


class MigrationRunResponse(BaseModel):
    latest_version: int
    results: list[MigrationResultResponse]
