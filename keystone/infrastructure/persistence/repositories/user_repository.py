"""UserRepository - SQLAlchemy implementation of the UserRepository port.

Maps between domain User entities and the users table. Every method
acquires its own pooled session, released on every exit path.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, case, delete, func, null, or_, select, update

from keystone.domain.entities import User
from keystone.domain.enums import AccountStatus, UserRole
from keystone.infrastructure.persistence.database import Database
from keystone.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy user repository.

    Does NOT inherit from the UserRepository protocol (structural typing).

    Example:
        >>> repo = UserRepository(database)
        >>> user = await repo.find_by_email("Editor@Example.com")
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def find_by_id(self, user_id: UUID) -> User | None:
        async with self._database.get_session() as session:
            user_model = await session.get(UserModel, user_id)
            return self._to_domain(user_model) if user_model else None

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Emails are stored lowercase, so the lookup lowercases its input
        and compares with ``lower(email)`` to cover legacy rows.
        """
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        async with self._database.get_session() as session:
            user_model = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_domain(user_model) if user_model else None

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(UserModel.id).where(
            func.lower(UserModel.email) == email.strip().lower()
        )
        async with self._database.get_session() as session:
            return (await session.execute(stmt)).scalar_one_or_none() is not None

    async def save(self, user: User) -> None:
        """Insert a new user.

        Raises:
            IntegrityError: If the email already exists.
        """
        async with self._database.get_session() as session:
            session.add(self._to_model(user))

    async def update_status(self, user: User, *, expected: AccountStatus) -> bool:
        """Write a status transition guarded by the status it was made from.

        Returns:
            False if the row is gone or its status is no longer ``expected``.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id, UserModel.status == expected.value)
            .values(
                status=user.status.value,
                is_active=user.is_active,
                email_verified=user.email_verified,
                updated_by=user.updated_by,
                updated_at=user.updated_at,
            )
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            return bool(result.rowcount)

    async def update_password(self, user: User) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(
                password_hash=user.password_hash,
                password_salt=user.password_salt,
                password_changed_at=user.password_changed_at,
                updated_by=user.updated_by,
                updated_at=user.updated_at,
            )
        )
        async with self._database.get_session() as session:
            await session.execute(stmt)

    async def record_login(
        self, user_id: UUID, ip_address: str | None, at: datetime
    ) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(last_login_at=at, last_login_ip=ip_address, last_activity_at=at)
        )
        async with self._database.get_session() as session:
            await session.execute(stmt)

    async def touch_activity(self, user_id: UUID, at: datetime) -> None:
        stmt = update(UserModel).where(UserModel.id == user_id).values(last_activity_at=at)
        async with self._database.get_session() as session:
            await session.execute(stmt)

    async def increment_failed_logins(
        self, user_id: UUID, *, max_attempts: int, lock_until: datetime, now: datetime
    ) -> tuple[int, datetime | None]:
        """Count one wrong password in a single UPDATE ... RETURNING.

        Both CASE expressions read the pre-update row, so concurrent callers
        serialise on the row lock and none of their increments is lost.
        """
        lock_expired = and_(
            UserModel.locked_until.is_not(None), UserModel.locked_until <= now
        )
        attempts = case((lock_expired, 1), else_=UserModel.failed_login_attempts + 1)
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                failed_login_attempts=attempts,
                locked_until=case(
                    (UserModel.locked_until > now, UserModel.locked_until),
                    (attempts >= max_attempts, lock_until),
                    else_=null(),
                ),
            )
            .returning(UserModel.failed_login_attempts, UserModel.locked_until)
        )
        async with self._database.get_session() as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return 0, None
            return row.failed_login_attempts, row.locked_until

    async def reset_failed_logins(self, user_id: UUID) -> None:
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                or_(
                    UserModel.failed_login_attempts > 0,
                    UserModel.locked_until.is_not(None),
                ),
            )
            .values(failed_login_attempts=0, locked_until=None)
        )
        async with self._database.get_session() as session:
            await session.execute(stmt)

    async def delete(self, user_id: UUID) -> bool:
        """Hard delete. Sessions, history and reset tokens cascade."""
        async with self._database.get_session() as session:
            result = await session.execute(delete(UserModel).where(UserModel.id == user_id))
            return bool(result.rowcount)

    async def list_by_status(
        self, status: AccountStatus, *, limit: int = 50, offset: int = 0
    ) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.status == status.value)
            .order_by(UserModel.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        async with self._database.get_session() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [self._to_domain(row) for row in rows]

    def _to_domain(self, user_model: UserModel) -> User:
        return User(
            id=user_model.id,
            email=user_model.email,
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            password_hash=user_model.password_hash,
            password_salt=user_model.password_salt,
            role=UserRole(user_model.role),
            status=AccountStatus(user_model.status),
            is_active=user_model.is_active,
            email_verified=user_model.email_verified,
            failed_login_attempts=user_model.failed_login_attempts,
            locked_until=user_model.locked_until,
            password_changed_at=user_model.password_changed_at,
            last_login_at=user_model.last_login_at,
            last_login_ip=user_model.last_login_ip,
            last_activity_at=user_model.last_activity_at,
            created_by=user_model.created_by,
            updated_by=user_model.updated_by,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            password_hash=user.password_hash,
            password_salt=user.password_salt,
            password_changed_at=user.password_changed_at,
            status=user.status.value,
            is_active=user.is_active,
            email_verified=user.email_verified,
            failed_login_attempts=user.failed_login_attempts,
            locked_until=user.locked_until,
            last_login_at=user.last_login_at,
            last_login_ip=user.last_login_ip,
            last_activity_at=user.last_activity_at,
            created_by=user.created_by,
            updated_by=user.updated_by,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
