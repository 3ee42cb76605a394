"""SQLAlchemy async models for Sport Tracker."""

import enum
from datetime import datetime
from typing import List

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _now_local() -> datetime:
    """Naive wall-clock time from the host's local calendar."""
    return datetime.now()


class WorkoutType(str, enum.Enum):
    """Closed set of workout categories.

    Declaration order is significant: it breaks ties when picking the most
    frequent category.
    """

    GYM = "GYM"
    TENNIS = "TENNIS"
    RUNNING = "RUNNING"
    FOOTBALL = "FOOTBALL"
    BASKETBALL = "BASKETBALL"
    YOGA = "YOGA"
    SWIMMING = "SWIMMING"
    CYCLING = "CYCLING"
    OTHER = "OTHER"


class Language(str, enum.Enum):
    EN = "en"
    RU = "ru"


MAX_WORKOUT_MINUTES = 1440


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class User(Base):
    """A Telegram user, registered on first contact."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    telegram_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    language: Mapped[Language] = mapped_column(
        Enum(Language, name="language"), nullable=False, default=Language.EN
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_now_local
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_now_local, onupdate=_now_local
    )

    workouts: Mapped[List["Workout"]] = relationship(
        "Workout", back_populates="user", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_users_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, telegram_id={self.telegram_id}, name='{self.name}')>"


class Workout(Base):
    """A single logged workout. Immutable once written."""

    __tablename__ = "workouts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[WorkoutType] = mapped_column(
        Enum(WorkoutType, name="workout_type"), nullable=False
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_now_local
    )

    user: Mapped["User"] = relationship("User", back_populates="workouts")

    __table_args__ = (
        Index("idx_workouts_user_id", "user_id"),
        Index("idx_workouts_created_at", "created_at"),
        Index("idx_workouts_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Workout(id={self.id}, user_id={self.user_id}, type={self.type.value}, "
            f"duration={self.duration})>"
        )
