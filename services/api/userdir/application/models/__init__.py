from .claims import TokenClaims, Subject
