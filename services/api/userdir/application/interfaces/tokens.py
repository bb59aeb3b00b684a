from abc import ABC, abstractmethod
import userdir.application.models as m


class ITokenCodec(ABC):
    @property
    @abstractmethod
    def algorithm(self) -> str: ...

    @abstractmethod
    def sign(self, claims: m.TokenClaims) -> str:
        """Encodes claims into a compact, tamper-evident string"""

    @abstractmethod
    def verify(self, token: str) -> m.TokenClaims:
        """Returns the claims or raises InvalidTokenException. Must never trust the algorithm named by the token itself."""
