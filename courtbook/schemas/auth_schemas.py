# courtbook/schemas/auth_schemas.py
import datetime as dt
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterStudentInput(BaseModel):
    name: str = Field(..., min_length=1, description="Student name")
    email: EmailStr = Field(..., description="Institutional email")
    password: str = Field(..., min_length=6)
    whatsapp: str = Field(..., min_length=1)
    birthDate: dt.date

    @field_validator("birthDate", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value):
        return parse_calendar_day(value)


class LoginInput(BaseModel):
    # email or guard username
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class VerifyEmailInput(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=4, max_length=4)


class CreateAdminInput(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    setupKey: str = Field(..., min_length=1)


class CreateGuardInput(BaseModel):
    # one of email/username is required, checked in GuardService.create_guard
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=3)
    password: str = Field(..., min_length=6)
    whatsapp: Optional[str] = None


def parse_calendar_day(value):
    """
    Accept a date, a datetime or an ISO string ("2025-06-01" or
    "2025-06-01T13:00:00Z") and keep only the calendar day.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return dt.datetime.fromisoformat(text).date()
    return value
