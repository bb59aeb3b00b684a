from .users import User, UserPatch, UserType, DefaultUserType, DEFAULT_USER_TYPES, MAX_PASSWORD_BYTES
from .messages import UserMessage
