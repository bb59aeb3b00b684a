from .users import IUserRepository
