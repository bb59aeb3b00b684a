from abc import ABC, abstractmethod

class IPasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Must return False on mismatch or malformed hash. Never raises for control flow."""


class IPasswordHasherAsync(ABC):
    """Same contract as IPasswordHasher, for CPU-bound hashers run off the event loop"""

    @abstractmethod
    async def hash(self, password: str) -> str: ...

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool: ...
