import userdir.domain.exceptions as domexc
import userdir.application.exceptions as appexc
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

import logging

logger = logging.getLogger('userdir')


def _error(message: str, status: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = '.'.join(str(part) for part in err.get('loc', ()) if part != 'body')
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get('msg')))
    return '; '.join(parts)


def register_exception_handlers(app):

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        return _error(f"Bad Request: {_describe_validation(exc)}", 400)


    @app.exception_handler(appexc.AuthBaseException)
    async def auth_exception_handler(request, exc: appexc.AuthBaseException):
        if isinstance(exc, appexc.InvalidTokenException):
            logger.info(f'[AUTH: Gate] Rejected {request.method} {request.url.path}: {exc}')
            return _error("invalid or missing token", 401)
        return _error(str(exc), 401)


    @app.exception_handler(domexc.AccessException)
    async def access_exception_handler(request, exc: domexc.AccessException):
        return _error("Not Authorized", 401)


    @app.exception_handler(domexc.BaseUserException)
    async def user_exception_handler(request, exc: domexc.BaseUserException):
        if isinstance(exc, domexc.UserValueError):
            return _error(f"Bad Request: {exc}", 400)
        return _error(str(exc), 400)


    @app.exception_handler(domexc.StoreError)
    async def store_exception_handler(request, exc: domexc.StoreError):
        return _error(str(exc), 400)
