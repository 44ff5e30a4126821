"""Authentication related schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .user import AcademicYear, UserRead


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    department: str = Field(default="", max_length=120)
    year: AcademicYear = ""


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    department: str | None = Field(default=None, max_length=120)
    year: AcademicYear | None = None
    bio: str | None = Field(default=None, max_length=500)

    model_config = ConfigDict(extra="forbid")
