from fastapi import Depends, Request
import typing as t

import userdir.infrastructure.db as db
from userdir.infrastructure.db.sqla_manager import SQLAlchemySessionManager
import userdir.infrastructure.repositories as repos
import userdir.infrastructure.security as security
import userdir.infrastructure.adapters as adap
import userdir.application.interfaces as iapp
from userdir.common.config import Config

from sqlalchemy.ext.asyncio import AsyncSession


#Auth infrastructure choices
AuthStrategyType = security.StatelessJWTStrategy

_PasswordHasherType = security.BCryptHasher
PasswordHasherType = lambda: adap.AsyncHasher(_PasswordHasherType(Config.BCRYPT_ROUNDS))



#####################################
#             Databases             #
#####################################

DatabaseManagerType = SQLAlchemySessionManager
DatabaseSessionType = AsyncSession
DatabaseManager = DatabaseManagerType() #bound to Config.DB_URL in the app lifespan

UnitOfWork = db.SQLAlchemyUnitOfWork

async def get_db_session():
    async with DatabaseManager.session() as session:
        yield session

DatabaseDependency = t.Annotated[DatabaseSessionType, Depends(get_db_session)]

async def get_uow(session: DatabaseDependency) -> t.AsyncIterable[UnitOfWork]:
    uow = UnitOfWork(session)
    yield uow
    await uow.commit() #Rollback is executed by SessionManager. Session is already wrapped in try/except with rollback on except, close on finally.
UoWDependency = t.Annotated[UnitOfWork, Depends(get_uow)]


#####################################
#       Repositories & security     #
#####################################

UserRepository = repos.SQLAUserRepository

async def get_user_repo(uow: UoWDependency):
    return UserRepository(uow.session, uow)

def get_password_hasher():
    return PasswordHasherType()

def get_token_codec(request: Request) -> iapp.ITokenCodec:
    '''The codec is built once in the lifespan, the secret never leaves it'''
    return request.app.state.token_codec

UserRepoDependency = t.Annotated[UserRepository, Depends(get_user_repo)]
PasswordHasherDependency = t.Annotated[adap.AsyncHasher, Depends(get_password_hasher)]
TokenCodecDependency = t.Annotated[iapp.ITokenCodec, Depends(get_token_codec)]
