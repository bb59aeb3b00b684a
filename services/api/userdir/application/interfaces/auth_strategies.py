from abc import ABC, abstractmethod
import userdir.application.models as m


class IAuthStrategy(ABC):
    @abstractmethod
    async def authenticate(self, credentials: dict) -> m.Subject:
        """Takes in credentials ({"token": ...}), validates them and returns the authenticated Subject."""


class ILoginMixin(ABC):
    @abstractmethod
    async def login(self, credentials: dict) -> str:
        """Validate email/password credentials and issue an access token"""
        ...
