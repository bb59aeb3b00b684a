from .sqla_manager import SQLAlchemySessionManager
from .sqla_uow import SQLAlchemyUnitOfWork
