from userdir.domain.services import IPasswordHasher, IPasswordHasherAsync
from userdir.infrastructure.telemetry.traces import TracerType
import asyncio

class AsyncHasher(IPasswordHasherAsync):
    """Runs a (deliberately slow) sync hasher in a worker thread"""
    def __init__(self, sync_hasher: IPasswordHasher):
        self._sync_hasher = sync_hasher

    @TracerType.traced
    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._sync_hasher.hash, password)

    @TracerType.traced
    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._sync_hasher.verify, password, password_hash)
