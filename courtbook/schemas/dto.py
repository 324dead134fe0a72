# courtbook/schemas/dto.py
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict

from courtbook.models.court_request import CourtRequest
from courtbook.models.user import User


class BaseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    @classmethod  # every DTO spells out its own mapping
    def from_orm_model(cls, orm_obj):
        raise NotImplementedError(
            f"{cls.__name__}.from_orm_model() must be implemented"
        )


class PublicUserDTO(BaseDTO):
    """User as returned to clients: no password hash, no verification code."""
    id: str
    name: str
    email: str
    role: str
    username: Optional[str] = None
    whatsapp: Optional[str] = None
    birthDate: Optional[dt.date] = None

    @classmethod
    def from_orm_model(cls, user: User) -> "PublicUserDTO":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            username=user.username,
            whatsapp=user.whatsapp,
            birthDate=user.birth_date,
        )


class RequestOwnerDTO(BaseDTO):
    id: str
    name: str
    email: str
    whatsapp: Optional[str] = None
    birthDate: Optional[dt.date] = None

    @classmethod
    def from_orm_model(cls, user: User) -> "RequestOwnerDTO":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            whatsapp=user.whatsapp,
            birthDate=user.birth_date,
        )


class CourtRequestDTO(BaseDTO):
    id: str
    userId: str
    date: dt.date
    startTime: str
    endTime: str
    status: str
    adminObservation: Optional[str] = None
    createdAt: Optional[dt.datetime] = None
    user: Optional[RequestOwnerDTO] = None

    @classmethod
    def from_orm_model(cls, request: CourtRequest) -> "CourtRequestDTO":
        return cls(
            id=request.id,
            userId=request.user_id,
            date=request.date,
            startTime=request.start_time,
            endTime=request.end_time,
            status=request.status.value,
            adminObservation=request.admin_observation,
            createdAt=request.created_at,
            user=RequestOwnerDTO.from_orm_model(request.user) if request.user else None,
        )
