from .connections import ConnectionManagerInterface, SessionManagerInterface
from .uow import IUnitOfWork
from .tracer import ITracer
