from .users import SQLAUserRepository
