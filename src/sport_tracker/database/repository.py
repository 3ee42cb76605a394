"""Async repository pattern implementation for database operations."""

from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar, Union

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Base, Language, User, Workout, WorkoutType

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Base repository with async CRUD operations."""

    def __init__(self, model: Type[ModelType]) -> None:
        self.model = model

    async def get(self, session: AsyncSession, id: int) -> Optional[ModelType]:
        """Get a single record by ID."""
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType
    ) -> ModelType:
        """Create a new record."""
        if isinstance(obj_in, dict):
            obj_data = obj_in
        else:
            obj_data = (
                obj_in.model_dump()
                if hasattr(obj_in, "model_dump")
                else obj_in.__dict__
            )

        db_obj = self.model(**obj_data)
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict],
    ) -> ModelType:
        """Update an existing record."""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = (
                obj_in.model_dump(exclude_unset=True)
                if hasattr(obj_in, "model_dump")
                else obj_in.__dict__
            )

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def count(self, session: AsyncSession) -> int:
        """Count all records."""
        stmt = select(func.count()).select_from(self.model)
        result = await session.execute(stmt)
        return result.scalar_one()


class UserRepository(BaseRepository[User, dict, dict]):
    """Repository for User operations."""

    async def get_by_telegram_id(
        self, session: AsyncSession, telegram_id: int
    ) -> Optional[User]:
        stmt = select(User).where(User.telegram_id == telegram_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self, session: AsyncSession, telegram_id: int, name: str | None
    ) -> User:
        """Find a user by Telegram ID, registering them on first contact.

        An existing user's display name is refreshed when it changed.
        """
        user = await self.get_by_telegram_id(session, telegram_id)
        if user is None:
            return await self.create(
                session, obj_in={"telegram_id": telegram_id, "name": name}
            )
        if name and user.name != name:
            user = await self.update(session, db_obj=user, obj_in={"name": name})
        return user

    async def set_language(
        self, session: AsyncSession, user_id: int, language: Language
    ) -> Optional[User]:
        user = await self.get(session, user_id)
        if user is None:
            return None
        return await self.update(session, db_obj=user, obj_in={"language": language})

    async def count_created_since(self, session: AsyncSession, since: datetime) -> int:
        """Count users registered at or after `since`."""
        stmt = select(func.count()).select_from(User).where(User.created_at >= since)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_all(self, session: AsyncSession) -> List[User]:
        stmt = select(User).order_by(User.id)
        result = await session.execute(stmt)
        return list(result.scalars().all())


class WorkoutRepository(BaseRepository[Workout, dict, dict]):
    """Repository for Workout operations."""

    async def find_for_user(
        self, session: AsyncSession, user_id: int, start: datetime, end: datetime
    ) -> List[Workout]:
        """Get a user's workouts created within [start, end], inclusive."""
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id)
            .where(Workout.created_at >= start)
            .where(Workout.created_at <= end)
            .order_by(Workout.created_at)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_recent_for_user(
        self, session: AsyncSession, user_id: int, *, limit: int = 5
    ) -> List[Workout]:
        """Get a user's most recent workouts, newest first."""
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.created_at.desc(), Workout.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def find_users_with_workouts(
        self, session: AsyncSession, start: datetime, end: datetime
    ) -> List[tuple[User, List[Workout]]]:
        """Pair every user with their workouts inside [start, end].

        Users with no workouts in range are included with an empty list.
        """
        users_result = await session.execute(select(User).order_by(User.id))
        users = list(users_result.scalars().all())

        stmt = (
            select(Workout)
            .where(Workout.created_at >= start)
            .where(Workout.created_at <= end)
            .order_by(Workout.created_at)
        )
        result = await session.execute(stmt)
        by_user: dict[int, List[Workout]] = {}
        for workout in result.scalars().all():
            by_user.setdefault(workout.user_id, []).append(workout)

        return [(user, by_user.get(user.id, [])) for user in users]

    async def count_users_with_workouts_in_range(
        self, session: AsyncSession, start: datetime, end: datetime
    ) -> int:
        """Count distinct users with at least one workout inside [start, end]."""
        stmt = (
            select(func.count(distinct(Workout.user_id)))
            .where(Workout.created_at >= start)
            .where(Workout.created_at <= end)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def average_duration(self, session: AsyncSession) -> float:
        """Mean duration across all workouts, 0.0 when there are none."""
        result = await session.execute(select(func.avg(Workout.duration)))
        avg = result.scalar_one_or_none()
        return float(avg) if avg is not None else 0.0

    async def count_by_type(self, session: AsyncSession) -> dict[WorkoutType, int]:
        stmt = select(Workout.type, func.count()).group_by(Workout.type)
        result = await session.execute(stmt)
        return {wtype: count for wtype, count in result.all()}


# Repository instances
user_repo = UserRepository(User)
workout_repo = WorkoutRepository(Workout)
