import typing as t
import logging
from sqlalchemy.ext.asyncio import AsyncSession
import userdir.infrastructure.interfaces as iabc

logger = logging.getLogger('userdir.storage')

class SQLAlchemyUnitOfWork(iabc.IUnitOfWork[AsyncSession]):
    def __init__(self, session: AsyncSession):
        self._session = session
        self._post_commit_hooks: list[t.Callable[[], t.Awaitable[t.Any]]] = []

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def commit(self) -> None:
        await self._session.commit()
        await self.run_hooks()

    async def rollback(self) -> None:
        await self._session.rollback()
        self._post_commit_hooks.clear() #nothing was committed => nothing to follow up on

    def add_post_commit_hook(self, hook: t.Callable[[], t.Awaitable[t.Any]]) -> None:
        self._post_commit_hooks.append(hook)

    async def run_hooks(self) -> None:
        hooks, self._post_commit_hooks = self._post_commit_hooks, []
        for hook_factory in hooks:
            try:
                await hook_factory()
            except Exception as e:
                logger.exception(f"[UoW] Exception while executing post-commit hook. Exception: {e}")
