from .auth import AuthService, TokenAuthService
from .users import UserService
