from .passwords import BCryptHasher
from .tokens import JWTTokenCodec, SUPPORTED_ALGORITHMS
from .auth_strategies import StatelessJWTStrategy
