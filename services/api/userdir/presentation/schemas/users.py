import datetime as dt
import pydantic as p
from pydantic.alias_generators import to_camel


class CamelModel(p.BaseModel):
    '''Wire format is camelCase (userType, messageCount, ...), python side stays snake_case'''
    model_config = p.ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserDTO(CamelModel):
    id: int
    username: str
    email: str
    user_type: str
    nickname: str|None = None
    message_count: int|None = None

class UsersResponse(CamelModel):
    users: list[UserDTO]

class UserResponse(CamelModel):
    user: UserDTO


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v

def _reject_blank(v):
    if isinstance(v, str) and not v.strip():
        raise ValueError('must not be blank')
    return v


class UserCreationModel(CamelModel):
    model_config = p.ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='forbid')

    username: str = p.Field(min_length=1, max_length=64, description='Display username')
    email: str = p.Field(min_length=3, max_length=254, description='Unique email, used as the login key')
    user_type: str = p.Field(min_length=1, description='Key of a row in the user types table, e.g. UTYPE_USER')
    nickname: str|None = p.Field(default=None, description='Optional nickname, blank means none')
    password: str = p.Field(min_length=1, description='Plain password, only its hash is stored')

    @p.field_validator('nickname', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    @p.field_validator('username', 'email', 'user_type')
    @classmethod
    def not_blank(cls, v):
        return _reject_blank(v)


class UserPatchModel(CamelModel):
    """Sparse update. Which keys were sent is read from `model_fields_set`:
    an explicit `"nickname": null` clears the nickname, a missing key leaves it alone.
    `null` for the other fields means unchanged, a blank string is rejected."""
    model_config = p.ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='forbid')

    username: str|None = p.Field(default=None, min_length=1, max_length=64, description="New username")
    email: str|None = p.Field(default=None, min_length=3, max_length=254, description="New email")
    user_type: str|None = p.Field(default=None, min_length=1, description="New user type key")
    nickname: str|None = p.Field(default=None, description="New nickname. null or blank clears it")

    @p.field_validator('nickname', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    @p.field_validator('username', 'email', 'user_type')
    @classmethod
    def not_blank(cls, v):
        return _reject_blank(v)


class UserMessageCreationModel(CamelModel):
    message: str = p.Field(min_length=1, description='Free text message')

class UserMessageDTO(CamelModel):
    id: int
    user_id: int
    message: str
    created_at: dt.datetime

    @p.field_serializer('created_at')
    def to_rfc3339(self, value: dt.datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc) #stores without tz support hand out UTC
        return value.isoformat(timespec='seconds')

class UserMessageResponse(CamelModel):
    user_message: UserMessageDTO
