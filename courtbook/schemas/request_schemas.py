# courtbook/schemas/request_schemas.py
import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from courtbook.schemas.auth_schemas import parse_calendar_day


class CreateRequestInput(BaseModel):
    date: dt.date
    startTime: str = Field(..., min_length=1)
    endTime: str = Field(..., min_length=1)
    optionalObservation: Optional[str] = None  # accepted, not stored

    @field_validator("date", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value):
        return parse_calendar_day(value)


class UpdateRequestStatusInput(BaseModel):
    status: Literal["APPROVED", "REJECTED", "CANCELLED"]
    adminObservation: Optional[str] = None


class RequestFilters(BaseModel):
    status: Optional[Literal["PENDING", "APPROVED", "REJECTED", "CANCELLED"]] = None
    dateFrom: Optional[dt.date] = None
    dateTo: Optional[dt.date] = None

    @field_validator("dateFrom", "dateTo", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value):
        if value in (None, ""):
            return None
        return parse_calendar_day(value)


class AgendaQuery(BaseModel):
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value):
        return parse_calendar_day(value)
