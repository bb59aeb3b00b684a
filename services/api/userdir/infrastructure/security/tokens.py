from userdir.application.interfaces import ITokenCodec
from userdir.common.exceptions import ConfigurationError
from userdir.infrastructure.telemetry.traces import TracerType
import userdir.application.exceptions as appexc
import userdir.application.models as m

import pydantic as p
import jwt

#Symmetric MAC algorithms only. "none" and asymmetric ones are refused at construction.
SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")
REQUIRED_CLAIMS = ["id", "userType"]


class JWTTokenCodec(ITokenCodec):
    """Signs and verifies access tokens with a process-wide HMAC secret.

    The accepted algorithm is pinned at construction; the `alg` header of an
    incoming token is never used to pick the verification method.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ConfigurationError("Token signing secret must not be empty")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(f"Unsupported token algorithm '{algorithm}'. Use one of: {', '.join(SUPPORTED_ALGORITHMS)}")
        self._secret = secret
        self._algorithm = algorithm

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algorithm={self._algorithm!r})"

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @TracerType.traced
    def sign(self, claims: m.TokenClaims) -> str:
        return jwt.encode(claims.to_payload(), self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> m.TokenClaims:
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise appexc.TokenExpiredException("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise appexc.InvalidTokenException("Token is invalid") from e

        try:
            return m.TokenClaims.model_validate(data)
        except p.ValidationError as e:
            raise appexc.InvalidTokenException("Token claims are malformed") from e
