import asyncio
import datetime as dt

import userdir.domain.repositories as repo
import userdir.domain.models as domain
import userdir.domain.exceptions as domexc


class InMemoryUserRepository(repo.IUserRepository):
    """Dict-backed store with the same observable behaviour as the SQL one.
    Used by service and API tests that don't need a database."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self.user_types: dict[str, domain.UserType] = {}
        self.users: dict[int, domain.User] = {}
        self.messages: list[domain.UserMessage] = []
        self._user_seq = 0
        self._message_seq = 0
        self.patch_calls = 0

    def _with_projections(self, user: domain.User) -> domain.User:
        user_type = self.user_types.get(user.user_type)
        return user.model_copy(update={
            'permission_bitfield': user_type.permission_bitfield if user_type else None,
            'message_count': sum(1 for m in self.messages if m.user_id == user.id),
        })

    async def list(self) -> list[domain.User]:
        async with self._lock:
            return [self._with_projections(self.users[uid]) for uid in sorted(self.users)]

    async def get_by_email(self, email: str) -> domain.User | None:
        async with self._lock:
            return next((u.model_copy() for u in self.users.values() if u.email == email), None)

    async def create(self, user: domain.User) -> domain.User:
        async with self._lock:
            if any(u.email == user.email for u in self.users.values()):
                raise domexc.UserAlreadyExists(f"Failed to create user: UNIQUE constraint failed: users.email")
            if user.user_type not in self.user_types:
                raise domexc.UserIntegrityError(f"Failed to create user: FOREIGN KEY constraint failed")
            self._user_seq += 1
            saved = user.model_copy(update={'id': self._user_seq})
            self.users[saved.id] = saved
            return saved.model_copy()

    async def patch(self, user_id: int, patch: domain.UserPatch) -> domain.User:
        async with self._lock:
            self.patch_calls += 1
            user = self.users.get(user_id)
            if user is None:
                raise domexc.UserDoesNotExist(f"Failed to update user: user id={user_id} does not exist")
            changes = patch.changes()
            if 'email' in changes and any(u.email == changes['email'] and u.id != user_id for u in self.users.values()):
                raise domexc.UserAlreadyExists(f"Failed to update user: UNIQUE constraint failed: users.email")
            if 'user_type' in changes and changes['user_type'] not in self.user_types:
                raise domexc.UserIntegrityError(f"Failed to update user: FOREIGN KEY constraint failed")
            updated = user.apply_patch(patch)
            self.users[user_id] = updated
            return updated.model_copy()

    async def create_message(self, message: domain.UserMessage) -> domain.UserMessage:
        async with self._lock:
            if message.user_id not in self.users:
                raise domexc.StoreError(f"Failed to create message: FOREIGN KEY constraint failed")
            self._message_seq += 1
            saved = message.model_copy(update={
                'id': self._message_seq,
                'created_at': dt.datetime.now(dt.timezone.utc).replace(microsecond=0),
            })
            self.messages.append(saved)
            return saved.model_copy()

    async def ensure_user_types_exist(self) -> None:
        async with self._lock:
            for user_type in domain.DEFAULT_USER_TYPES:
                self.user_types.setdefault(user_type.type_key, user_type)
