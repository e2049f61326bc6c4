from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models import UserRole


def _required_text(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value must not be blank.")
    return stripped


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return _required_text(value)


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str = Field(min_length=8)

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _required_text(value)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class NamedCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return _required_text(value)


class NamedUpdate(BaseModel):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: Optional[str]) -> Optional[str]:
        return _optional_text(value)


class DistrictCreate(NamedCreate):
    region: str

    @field_validator("region")
    @classmethod
    def normalize_region(cls, value: str) -> str:
        return _required_text(value)


class DistrictUpdate(NamedUpdate):
    region: Optional[str] = None

    @field_validator("region")
    @classmethod
    def normalize_region(cls, value: Optional[str]) -> Optional[str]:
        return _optional_text(value)


class InstitutionCreate(NamedCreate):
    status: bool = False
    image: Optional[str] = None


class InstitutionUpdate(NamedUpdate):
    status: Optional[bool] = None
    image: Optional[str] = None


class NomineeCreate(NamedCreate):
    position_id: int
    institution_id: int
    district_id: int
    status: bool = False
    evidence: Optional[str] = None
    image: Optional[str] = None


class NomineeUpdate(NamedUpdate):
    position_id: Optional[int] = None
    institution_id: Optional[int] = None
    district_id: Optional[int] = None
    status: Optional[bool] = None
    evidence: Optional[str] = None
    image: Optional[str] = None


class RatingCategoryCreate(NamedCreate):
    keyword: str = ""
    icon: str = ""
    description: str = ""
    weight: float = Field(default=0, ge=0)


class RatingCategoryUpdate(NamedUpdate):
    keyword: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0)

    @field_validator("keyword", "icon")
    @classmethod
    def strip_markers(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class RatingFields(BaseModel):
    rating_category_id: int
    score: float = Field(ge=0, le=5)
    evidence: Optional[str] = None
    severity: Optional[str] = None


class NomineeRatingCreate(RatingFields):
    nominee_id: int


class InstitutionRatingCreate(RatingFields):
    institution_id: int


class RatingUpdate(BaseModel):
    rating_category_id: Optional[int] = None
    score: Optional[float] = Field(default=None, ge=0, le=5)
    evidence: Optional[str] = None
    severity: Optional[str] = None


class CommentCreate(BaseModel):
    content: str
    nominee_id: Optional[int] = None
    institution_id: Optional[int] = None

    @field_validator("content")
    @classmethod
    def normalize_content(cls, value: str) -> str:
        return _required_text(value)

    @model_validator(mode="after")
    def exactly_one_subject(self) -> "CommentCreate":
        if (self.nominee_id is None) == (self.institution_id is None):
            raise ValueError("Provide exactly one of nominee_id or institution_id.")
        return self


class CommentUpdate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def normalize_content(cls, value: str) -> str:
        return _required_text(value)


class UserCreate(BaseModel):
    name: str
    email: str
    password: str = Field(min_length=8)
    role: UserRole = UserRole.USER
    is_active: bool = True

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _required_text(value)


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _optional_text(value)
