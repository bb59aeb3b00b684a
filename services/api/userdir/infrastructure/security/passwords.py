from userdir.domain.services import IPasswordHasher
import bcrypt


class BCryptHasher(IPasswordHasher):
    def __init__(self, rounds: int = 14):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError: #malformed hash or oversized password - a mismatch, not an error
            return False
