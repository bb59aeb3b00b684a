import userdir.domain.repositories as repo
import userdir.domain.models as domain
import userdir.domain.exceptions as domexc
import userdir.infrastructure.models as db
import userdir.infrastructure.interfaces as iabc

from sqlalchemy.ext.asyncio import AsyncSession
import sqlalchemy.exc as sqlexc
import sqlalchemy as sa
import sqlmodel as sqlm
import typing as t

import logging

logger = logging.getLogger('userdir.storage')


class SQLAUserRepository(repo.IUserRepository):
    """Repository implementation for the user directory using SQLAlchemy AsyncSession.

    Handles the user, user type and message tables and converts driver errors
    into domain-level exceptions. The driver text is kept in the message.
    """

    def __init__(self, session: AsyncSession, uow: iabc.IUnitOfWork | None = None):
        """Initialize the repository with an asynchronous SQLAlchemy session.

        Args:
            session (AsyncSession): An active SQLAlchemy async session.
            uow (IUnitOfWork | None): Unit of work owning the session. Used for post-commit hooks.
        """
        self.session = session
        self._uow = uow

    def _handle_integrity_error(self, error: sqlexc.IntegrityError, operation: str) -> t.NoReturn:
        """Convert SQLAlchemy IntegrityError into a domain exception.

        Raises:
            UserAlreadyExists: If the error is caused by a duplicate email.
            UserIntegrityError: Any other constraint violation (e.g. unknown user type).
        """
        msg = str(error.orig)
        lowered = msg.lower()
        if 'unique' in lowered and 'email' in lowered:
            raise domexc.UserAlreadyExists(f"Failed to {operation}: {msg}", orig=error.orig) from error
        raise domexc.UserIntegrityError(f"Failed to {operation}: {msg}", orig=error.orig) from error

    def _handle_store_error(self, error: sqlexc.DBAPIError, operation: str) -> t.NoReturn:
        logger.warning(f'[DB: Users] {operation} failed: {error.orig}')
        raise domexc.StoreError(f"Failed to {operation}: {error.orig}", orig=error.orig) from error

    def _list_query(self):
        message_count = (
            sa.select(sa.func.count(db.UserMessage.id))
            .where(db.UserMessage.user_id == db.User.id)
            .correlate(db.User)
            .scalar_subquery()
        )
        return (
            sqlm.select(db.User, db.UserType.permission_bitfield, message_count.label('message_count'))
            .outerjoin(db.UserType, db.User.user_type == db.UserType.type_key)
            .order_by(db.User.id)
        )

    async def list(self) -> list[domain.User]:
        """Retrieve all users ordered by id, with message count and permission bitfield.

        Returns:
            list[User]: List of all users. Empty if the store has none.
        """
        try:
            rows = (await self.session.execute(self._list_query())).all()
        except sqlexc.DBAPIError as e:
            self._handle_store_error(e, 'list users')
        return [
            domain.User.model_validate(user, from_attributes=True).model_copy(
                update={'permission_bitfield': bitfield, 'message_count': count}
            )
            for user, bitfield, count in rows
        ]

    async def get_by_email(self, email: str) -> domain.User | None:
        """Retrieve a user by their unique email.

        Returns:
            User | None: The user object, password hash included, if found, else None.
        """
        try:
            user = (await self.session.scalars(
                sqlm.select(db.User).where(db.User.email == email)
            )).one_or_none()
        except sqlexc.DBAPIError as e:
            self._handle_store_error(e, 'find user')
        return domain.User.model_validate(user, from_attributes=True) if user is not None else None

    async def create(self, user: domain.User) -> domain.User:
        """Creates a given user in the database
        Args:
            user: User to save

        Returns:
            User: a created user with the assigned id.
        """
        user_db = db.User(**user.model_dump(exclude={'id', 'permission_bitfield', 'message_count'}))
        try:
            self.session.add(user_db)
            await self.session.flush()
        except sqlexc.IntegrityError as e:
            self._handle_integrity_error(e, 'create user')
        except sqlexc.DBAPIError as e:
            self._handle_store_error(e, 'create user')
        created = domain.User.model_validate(user_db, from_attributes=True)
        if self._uow is not None:
            self._uow.add_post_commit_hook(lambda: self._log_committed('create', created.id))
        return created

    async def patch(self, user_id: int, patch: domain.UserPatch) -> domain.User:
        """Writes only the columns carried by the patch and returns the row as stored.

        Raises:
            UserDoesNotExist: no user with such id.
        """
        changes = patch.changes()
        if changes:
            query = (
                sa.update(db.User).where(db.User.id == user_id).values(**changes).returning(db.User)
                .execution_options(populate_existing=True)
            )
        else:
            query = sqlm.select(db.User).where(db.User.id == user_id)

        try:
            user = (await self.session.scalars(query)).one_or_none()
        except sqlexc.IntegrityError as e:
            self._handle_integrity_error(e, 'update user')
        except sqlexc.DBAPIError as e:
            self._handle_store_error(e, 'update user')

        if user is None:
            raise domexc.UserDoesNotExist(f"Failed to update user: user id={user_id} does not exist")
        if self._uow is not None:
            self._uow.add_post_commit_hook(lambda: self._log_committed('patch', user_id))
        return domain.User.model_validate(user, from_attributes=True)

    async def create_message(self, message: domain.UserMessage) -> domain.UserMessage:
        """Inserts a message and reads back the id and timestamp assigned by the database"""
        query = (
            sa.insert(db.UserMessage)
            .values(user_id=message.user_id, message=message.message)
            .returning(db.UserMessage.id, db.UserMessage.user_id, db.UserMessage.message, db.UserMessage.created_at)
        )
        try:
            row = (await self.session.execute(query)).mappings().one()
        except sqlexc.DBAPIError as e:
            self._handle_store_error(e, 'create message')
        return domain.UserMessage.model_validate(dict(row))

    async def ensure_user_types_exist(self) -> None:
        existing = set((await self.session.scalars(sqlm.select(db.UserType.type_key))).all())
        missing = [ut for ut in domain.DEFAULT_USER_TYPES if ut.type_key not in existing]
        for user_type in missing:
            self.session.add(db.UserType(**user_type.model_dump()))
        if missing:
            logger.info(f'[INIT DB] Seeding user types: {", ".join(ut.type_key for ut in missing)}')
            await self.session.flush()

    async def _log_committed(self, action: str, user_id: int | None) -> None:
        logger.debug(f'[DB: Users] {action} committed for user id={user_id}')
