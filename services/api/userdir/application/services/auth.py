import userdir.application.interfaces as iapp
import userdir.application.models as m
import userdir.presentation.schemas as schemas
import logging

logger = logging.getLogger('userdir')


class AuthService:
    def __init__(self, auth_strategy: iapp.IAuthStrategy):
        self.auth_strategy = auth_strategy

    async def authenticate(self, credentials: dict) -> m.Subject:
        return await self.auth_strategy.authenticate(credentials)


class LoginMixin:
    async def login(self, credentials: dict) -> schemas.TokenResponse:
        token = await self.auth_strategy.login(credentials)
        return schemas.TokenResponse(token=token)


class TokenAuthService(AuthService, LoginMixin):
    """Stateless bearer-token service: email/password login, JWT verification on every request."""
