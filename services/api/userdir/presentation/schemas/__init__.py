from .users import (
    UserDTO,
    UsersResponse,
    UserResponse,
    UserCreationModel,
    UserPatchModel,
    UserMessageCreationModel,
    UserMessageDTO,
    UserMessageResponse,
)
from .token import LoginModel, TokenResponse
