from .auth_strategies import IAuthStrategy, ILoginMixin
from .tokens import ITokenCodec
