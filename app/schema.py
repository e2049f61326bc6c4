from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    event,
    func,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import text

Base = declarative_base()


def casefold_name(name: str) -> str:
    """Case-insensitive uniqueness key for named lookup rows."""
    return name.strip().casefold()


def _created_at() -> Column:
    return Column(Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))


def _updated_at() -> Column:
    return Column(
        Text,
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    hashed_password = Column(Text, nullable=False)
    role = Column(Text, nullable=False, server_default=text("'User'"))
    is_active = Column(Integer, nullable=False, server_default=text("1"))
    created_at = _created_at()
    updated_at = _updated_at()

    __table_args__ = (
        CheckConstraint("role IN ('User', 'Admin')", name="ck_users_role"),
    )


class Session(Base):
    __tablename__ = "sessions"

    token = Column(Text, primary_key=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at = _created_at()


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    name_key = Column(Text, nullable=False)
    created_at = _created_at()
    updated_at = _updated_at()


class ImpactArea(Base):
    __tablename__ = "impact_areas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    name_key = Column(Text, nullable=False)
    created_at = _created_at()
    updated_at = _updated_at()


class Position(Base):
    __tablename__ = "positions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    name_key = Column(Text, nullable=False)
    created_at = _created_at()
    updated_at = _updated_at()


class District(Base):
    __tablename__ = "districts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    name_key = Column(Text, nullable=False)
    region = Column(Text, nullable=False)
    created_at = _created_at()
    updated_at = _updated_at()


class Institution(Base):
    __tablename__ = "institutions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    name_key = Column(Text, nullable=False)
    status = Column(Integer, nullable=False, server_default=text("0"))
    image = Column(Text)
    created_at = _created_at()
    updated_at = _updated_at()

    ratings = relationship(
        "InstitutionRating", order_by="InstitutionRating.id", viewonly=True
    )


class Nominee(Base):
    __tablename__ = "nominees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    position_id = Column(Integer, ForeignKey("positions.id"), nullable=False)
    institution_id = Column(Integer, ForeignKey("institutions.id"), nullable=False, index=True)
    district_id = Column(Integer, ForeignKey("districts.id"), nullable=False)
    status = Column(Integer, nullable=False, server_default=text("0"))
    evidence = Column(Text)
    image = Column(Text)
    created_at = _created_at()
    updated_at = _updated_at()

    position = relationship("Position", viewonly=True)
    institution = relationship("Institution", viewonly=True)
    district = relationship("District", viewonly=True)
    ratings = relationship("NomineeRating", order_by="NomineeRating.id", viewonly=True)


class RatingCategory(Base):
    __tablename__ = "rating_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    keyword = Column(Text, nullable=False, server_default=text("''"))
    icon = Column(Text, nullable=False, server_default=text("''"))
    description = Column(Text, nullable=False, server_default=text("''"))
    weight = Column(Float, nullable=False, server_default=text("0"))
    created_at = _created_at()
    updated_at = _updated_at()


class InstitutionRatingCategory(Base):
    __tablename__ = "institution_rating_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    keyword = Column(Text, nullable=False, server_default=text("''"))
    icon = Column(Text, nullable=False, server_default=text("''"))
    description = Column(Text, nullable=False, server_default=text("''"))
    weight = Column(Float, nullable=False, server_default=text("0"))
    created_at = _created_at()
    updated_at = _updated_at()


class NomineeRating(Base):
    __tablename__ = "nominee_ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nominee_id = Column(Integer, ForeignKey("nominees.id"), nullable=False, index=True)
    rating_category_id = Column(
        Integer, ForeignKey("rating_categories.id"), nullable=False
    )
    score = Column(Float, nullable=False)
    evidence = Column(Text)
    severity = Column(Text)
    created_at = _created_at()
    updated_at = _updated_at()

    category = relationship("RatingCategory", viewonly=True)

    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 5", name="ck_nominee_ratings_score"),
    )


class InstitutionRating(Base):
    __tablename__ = "institution_ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    institution_id = Column(Integer, ForeignKey("institutions.id"), nullable=False, index=True)
    rating_category_id = Column(
        Integer, ForeignKey("institution_rating_categories.id"), nullable=False
    )
    score = Column(Float, nullable=False)
    evidence = Column(Text)
    severity = Column(Text)
    created_at = _created_at()
    updated_at = _updated_at()

    category = relationship("InstitutionRatingCategory", viewonly=True)

    __table_args__ = (
        CheckConstraint(
            "score >= 0 AND score <= 5", name="ck_institution_ratings_score"
        ),
    )


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    nominee_id = Column(Integer, ForeignKey("nominees.id"))
    institution_id = Column(Integer, ForeignKey("institutions.id"))
    created_at = _created_at()
    updated_at = _updated_at()

    user = relationship("User", viewonly=True)


Index("uq_users_email_lower", func.lower(User.email), unique=True)
Index("uq_departments_name_key", Department.name_key, unique=True)
Index("uq_impact_areas_name_key", ImpactArea.name_key, unique=True)
Index("uq_positions_name_key", Position.name_key, unique=True)
Index("uq_districts_name_key", District.name_key, unique=True)
Index("uq_institutions_name_key", Institution.name_key, unique=True)


def _set_name_key(_mapper, _connection, target) -> None:
    target.name_key = casefold_name(target.name)


for _named_model in (Department, ImpactArea, Position, District, Institution):
    event.listen(_named_model, "before_insert", _set_name_key)
    event.listen(_named_model, "before_update", _set_name_key)
