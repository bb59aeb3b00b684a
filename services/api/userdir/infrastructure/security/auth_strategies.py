import userdir.application.interfaces as iapp
import userdir.application.exceptions as appexc
import userdir.application.models as mapp
import userdir.domain.repositories as repos
import userdir.domain.services as domsvc
from userdir.domain.models import MAX_PASSWORD_BYTES

from userdir.infrastructure.telemetry.traces import TracerType

import typing as t
import logging

logger = logging.getLogger('userdir')


class StatelessJWTStrategy(iapp.IAuthStrategy, iapp.ILoginMixin):
    """Email/password login issuing self-contained JWTs. Nothing is stored server side:
    a token stays valid until it expires (if a TTL is configured) or the secret changes."""

    def __init__(
        self,
        user_repo: repos.IUserRepository,
        password_hasher: domsvc.IPasswordHasherAsync,
        token_codec: iapp.ITokenCodec,
        *,
        access_expires_mins: t.Optional[int] = None,
    ):
        self.user_repo = user_repo
        self._hasher = password_hasher
        self.token_codec = token_codec
        self.access_expires_mins = access_expires_mins

    async def _burn_hash(self, password: str) -> None:
        '''One hashing round on the unknown-email path, so it costs as much as a password check'''
        await self._hasher.hash(password.encode()[:MAX_PASSWORD_BYTES].decode(errors='ignore'))

    async def login(self, credentials: dict) -> str:
        email = credentials.get('email')
        password = credentials.get('password')

        if not (email and password):
            raise appexc.CredentialsException()

        #Unknown email and bad password share one exception and message => no email enumeration
        user = await self.user_repo.get_by_email(email)
        with TracerType.start_span('login_password_verifying'):
            if user is None or not user.password_hash:
                await self._burn_hash(password)
                logger.info('[AUTH: Login] Rejected: no account for the given email')
                raise appexc.CredentialsException()

            if not await self._hasher.verify(password, user.password_hash):
                logger.info(f'[AUTH: Login] Rejected: bad password for user id={user.id}')
                raise appexc.CredentialsException()

        claims = mapp.TokenClaims.issue(user.id, user.user_type, self.access_expires_mins)
        logger.info(f'[AUTH: Login] Token issued for user id={user.id}')
        return self.token_codec.sign(claims)

    async def authenticate(self, credentials: dict) -> mapp.Subject:
        token = credentials.get('token')
        if not token:
            raise appexc.InvalidTokenException("Token is missing")
        claims = self.token_codec.verify(token)
        return mapp.Subject(id=claims.id, user_type=claims.user_type)
