#Fastapi/Asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn

#Project files
from userdir.common.config import Config
import userdir.infrastructure.telemetry.logs as logs
from userdir.infrastructure.telemetry import setup_opentelemetry, instrument_database
from userdir.infrastructure.telemetry.metrics import register_middlewares
from userdir.infrastructure.dependencies import DatabaseManager, UnitOfWork, UserRepository
from userdir.infrastructure.security import JWTTokenCodec
from userdir.presentation.exception_handlers import register_exception_handlers
import userdir.presentation.routers as routers

#Logging
import logging
import loguru # type: ignore


###################
#       App       #
###################

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'[APP: Startup] Startup began...')
    Config.ensure_required()

    #Security
    app.state.token_codec = JWTTokenCodec(Config.JWT_SECRET, Config.ALGORITHM)

    #Database
    DatabaseManager.init(Config.DB_URL, Config.DB_KWARGS)
    instrument_database(DatabaseManager.engine)
    await DatabaseManager.wait_for_startup(attempts=Config.DB_WAIT_MAX_RETRIES, interval_sec=Config.DB_WAIT_INTERVAL_SECONDS)
    await DatabaseManager.initialize_data_structures()

    #Default user types
    async with DatabaseManager.session() as session:
        uow = UnitOfWork(session)
        await UserRepository(session, uow).ensure_user_types_exist()
        await uow.commit()

    logger.info(f'[APP: Startup] Startup finished!')
    yield
    await DatabaseManager.close()
    logger.info(f'[APP: Shutdown] Database connections closed')


logs.init_loggers()
logger = logging.getLogger('userdir')

app = FastAPI(
    title = f'{Config.APP_NAME} commit {Config.GIT_COMMIT}',
    swagger_ui_parameters={
        "defaultModelsExpandDepth": -1,
        "docExpansion": None,
        "displayRequestDuration":True
    },
    lifespan=lifespan,
)

app.include_router(routers.AuthRouter)
app.include_router(routers.UserRouter)

setup_opentelemetry(app)
register_middlewares(app)
register_exception_handlers(app)


########################
#        Health        #
########################

@app.get("/health", include_in_schema=False)
async def health():
    """Indicates if the server is alive"""
    return {"status": "ok"}


@app.middleware("http")
async def add_logging_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        loguru.logger.exception(e)
        return JSONResponse(
            status_code=500,
            content={'error': 'Internal Server Error'}
        )


def serve():
    uvicorn.run("userdir.main:app", host=Config.UVICORN_HOST, port=Config.UVICORN_PORT)


if __name__ == "__main__":
    serve()
