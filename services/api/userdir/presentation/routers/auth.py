#Fastapi
from fastapi import APIRouter

#Project files
import userdir.presentation.schemas as schemas
import userdir.application.dependencies as appdeps

import logging

logger = logging.getLogger('userdir')
router = APIRouter(
    tags = ["auth"],
    )


@router.post("/login", responses={
    400: {"description":"Body has bad format"},
    401: {"description":"Bad credentials"},
    },
    description='If credentials are valid - returns a token to be used in Authorization header as "Bearer [token]"')
async def login(auth_service: appdeps.AuthServiceDependency, login_data: schemas.LoginModel) -> schemas.TokenResponse:
    credentials = {"email": login_data.email, "password": login_data.password}
    return await auth_service.login(credentials)
