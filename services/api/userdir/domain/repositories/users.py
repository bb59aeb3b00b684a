from abc import abstractmethod, ABC
import userdir.domain.models as domain

class IUserRepository(ABC):
    """Abstract base for the credential store. Specific implementations must inherit this base class.

    Every method is a single round trip. Failures surface as domain exceptions
    (UserAlreadyExists, UserIntegrityError, UserDoesNotExist, StoreError) carrying the store's error text.
    """

    @abstractmethod
    async def list(self) -> list[domain.User]:
        '''All users with `message_count` and `permission_bitfield` filled in'''

    @abstractmethod
    async def get_by_email(self, email: str) -> domain.User | None:
        '''Returns the user together with its password hash'''

    @abstractmethod
    async def create(self, user: domain.User) -> domain.User: ...

    @abstractmethod
    async def patch(self, user_id: int, patch: domain.UserPatch) -> domain.User:
        '''Applies only the supplied fields and returns the row as stored after the update'''

    @abstractmethod
    async def create_message(self, message: domain.UserMessage) -> domain.UserMessage: ...

    @abstractmethod
    async def ensure_user_types_exist(self) -> None: ...
