from fastapi import Depends, Path, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import typing as t

import userdir.infrastructure.dependencies as ideps
import userdir.application.services as services
import userdir.application.exceptions as appexc
import userdir.application.models as m
import userdir.domain.exceptions as domexc
from userdir.common.config import Config

import logging
logger = logging.getLogger('userdir')


async def get_auth_service(user_repo: ideps.UserRepoDependency, hasher: ideps.PasswordHasherDependency, token_codec: ideps.TokenCodecDependency):
    #use a matching service here
    strategy = ideps.AuthStrategyType(user_repo, hasher, token_codec, access_expires_mins=Config.ACCESS_TOKEN_EXPIRE_MINUTES)
    return services.TokenAuthService(strategy)

async def get_user_service(user_repo: ideps.UserRepoDependency, hasher: ideps.PasswordHasherDependency):
    return services.UserService(user_repo, hasher)

UserServiceDependency = t.Annotated[services.UserService, Depends(get_user_service)]
AuthServiceDependency = t.Annotated[services.TokenAuthService, Depends(get_auth_service)]

BearerCredentials = t.Annotated[HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))]

async def get_current_subject(request: Request, credentials: BearerCredentials, auth_service: AuthServiceDependency) -> m.Subject:
    if credentials is None:
        raise appexc.InvalidTokenException("Token is missing")
    subject = await auth_service.authenticate({"token": credentials.credentials})
    request.state.subject = subject
    return subject

CurrentSubjectDependency = t.Annotated[m.Subject, Depends(get_current_subject)]

async def get_owned_user_id(
        user_id: t.Annotated[int, Path(description='id of the target user, must be yours')],
        subject: CurrentSubjectDependency,
    ) -> int:
    '''Resolved before the request body is validated, so a foreign target gets 401 whatever it sends'''
    if subject.id != user_id:
        logger.warning(f'[USERS: Ownership] Subject id={subject.id} tried to act on user id={user_id} - denied')
        raise domexc.NotResourceOwner("Not Authorized")
    return user_id

OwnedUserIdDependency = t.Annotated[int, Depends(get_owned_user_id)]
