from .passwords import AsyncHasher
