"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from backend.domain.users.exceptions import CredentialIntegrityError
from backend.domain.users.repositories import PasswordHasher

# bcrypt only reads this many bytes; newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt with a per-hash random salt; ``rounds`` is the log2 work factor."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        candidate = password.encode("utf-8")
        # Nothing longer can have been hashed, so it cannot match.
        if len(candidate) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(candidate, hashed.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as exc:
            raise CredentialIntegrityError("stored password digest is malformed") from exc
