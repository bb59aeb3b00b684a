import abc, typing as t

SessionType = t.TypeVar("SessionType")

class IUnitOfWork(t.Generic[SessionType], abc.ABC):
    '''One per request: repositories share its session, the dependency commits it after the handler returns'''

    @property
    @abc.abstractmethod
    def session(self) -> SessionType: ...

    @abc.abstractmethod
    async def commit(self): ...

    @abc.abstractmethod
    async def rollback(self): ...

    @abc.abstractmethod
    def add_post_commit_hook(self, hook: t.Callable[[], t.Awaitable[t.Any]]): ...

    @abc.abstractmethod
    async def run_hooks(self):
        '''Vital for testing, when you need to execute hooks without committing'''
