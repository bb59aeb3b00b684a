import typing as t
import pydantic as p
from enum import Enum
from userdir.domain.services import IPasswordHasherAsync
import userdir.domain.exceptions as domexc

#bcrypt silently ignores (or, in recent versions, refuses) input past this length
MAX_PASSWORD_BYTES = 72

class DefaultUserType(str, Enum):
    USER = "UTYPE_USER"
    ADMIN = "UTYPE_ADMIN"

class UserType(p.BaseModel):
    '''Row of the role table. The bitfield is carried around but never interpreted.'''
    type_key: str
    permission_bitfield: int = 0

DEFAULT_USER_TYPES = (
    UserType(type_key=DefaultUserType.USER.value, permission_bitfield=1),
    UserType(type_key=DefaultUserType.ADMIN.value, permission_bitfield=3),
)


class User(p.BaseModel):
    model_config = p.ConfigDict(validate_assignment=True)

    id: int|None = None
    username: str
    email: str
    user_type: str
    nickname: str|None = None
    password_hash: str|None = p.Field(default=None, repr=False)

    #Read-only projections filled in by listing queries
    permission_bitfield: int|None = None
    message_count: int|None = None

    @staticmethod
    async def _hash_password(password: str, hasher: IPasswordHasherAsync):
        if not password:
            raise domexc.UserValueError("Password must not be empty")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise domexc.UserValueError(f"Maximal password length is {MAX_PASSWORD_BYTES} bytes")
        return await hasher.hash(password)

    @staticmethod
    async def create(username: str, email: str, user_type: str, password: str, hasher: IPasswordHasherAsync, nickname: str|None = None):
        password_hash = await User._hash_password(password, hasher)
        return User(
            username=username,
            email=email,
            user_type=user_type,
            nickname=nickname,
            password_hash=password_hash,
        )

    def apply_patch(self, patch: "UserPatch") -> "User":
        """Returns a copy with the patch applied. Used by stores that can't express the update in SQL."""
        return self.model_copy(update=patch.changes())


class UserPatch(p.BaseModel):
    """Sparse update over mutable User fields.

    `username`, `email` and `user_type` follow the "None means untouched" rule.
    `nickname` can't, since clearing it is a legitimate change: `nickname_provided`
    tells whether the key was present in the request at all.
    """
    username: str|None = None
    email: str|None = None
    user_type: str|None = None
    nickname: str|None = None
    nickname_provided: bool = False

    def changes(self) -> dict[str, t.Any]:
        fields = {
            key: value
            for key, value in dict(username=self.username, email=self.email, user_type=self.user_type).items()
            if value is not None
        }
        if self.nickname_provided:
            fields['nickname'] = self.nickname if self.nickname and self.nickname.strip() else None #blank clears as well
        return fields
