from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class AdminRegister(BaseModel):
    """Schema for registering an operator"""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)
    is_active: bool = True


class AdminLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class AdminResponse(BaseModel):
    """Admin details (never includes the password hash)"""

    id: str
    email: str
    name: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    admin: AdminResponse
