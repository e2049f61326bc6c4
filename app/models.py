from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    USER = "User"
    ADMIN = "Admin"


@dataclass
class User:
    id: int
    name: str
    email: str
    hashed_password: str
    role: UserRole
    is_active: bool
    created_at: str
    updated_at: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass
class Department:
    id: int
    name: str
    created_at: str
    updated_at: str


@dataclass
class ImpactArea:
    id: int
    name: str
    created_at: str
    updated_at: str


@dataclass
class Position:
    id: int
    name: str
    created_at: str
    updated_at: str


@dataclass
class District:
    id: int
    name: str
    region: str
    created_at: str
    updated_at: str


@dataclass
class RatingCategory:
    id: int
    name: str
    keyword: str
    icon: str
    description: str
    weight: float
    created_at: str
    updated_at: str


@dataclass
class Rating:
    id: int
    score: float
    evidence: Optional[str]
    severity: Optional[str]
    rating_category_id: int
    created_at: str
    updated_at: str
    nominee_id: Optional[int] = None
    institution_id: Optional[int] = None
    category: Optional[RatingCategory] = None


@dataclass
class ScoreSummary:
    """Plain arithmetic mean of rating scores; category weights are not applied."""

    average: Optional[float]
    count: int


@dataclass
class Institution:
    id: int
    name: str
    status: bool
    image: Optional[str]
    created_at: str
    updated_at: str
    ratings: Optional[list[Rating]] = None


@dataclass
class Nominee:
    id: int
    name: str
    position_id: int
    institution_id: int
    district_id: int
    status: bool
    evidence: Optional[str]
    image: Optional[str]
    created_at: str
    updated_at: str
    position: Optional[Position] = None
    institution: Optional[Institution] = None
    district: Optional[District] = None
    ratings: Optional[list[Rating]] = None


@dataclass
class Comment:
    id: int
    content: str
    user_id: int
    nominee_id: Optional[int]
    institution_id: Optional[int]
    created_at: str
    updated_at: str
    author_name: Optional[str] = None

