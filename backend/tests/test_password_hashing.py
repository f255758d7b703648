from __future__ import annotations

import pytest

from backend.application.services.password_hashing import BcryptPasswordHasher
from backend.domain.users.exceptions import CredentialIntegrityError


@pytest.fixture()
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.mark.parametrize("password", ["abc", "pass word", "한글비밀번호", "x" * 72])
def test_hash_then_verify(hasher: BcryptPasswordHasher, password: str) -> None:
    digest = hasher.hash(password)

    assert digest != password
    assert hasher.verify(password, digest) is True
    assert hasher.verify(password + "!", digest) is False


def test_hash_is_salted(hasher: BcryptPasswordHasher) -> None:
    assert hasher.hash("abc") != hasher.hash("abc")


def test_cost_factor_is_encoded_in_digest() -> None:
    digest = BcryptPasswordHasher().hash("abc")

    assert digest.startswith("$2b$10$")


def test_malformed_digest_is_an_integrity_error(hasher: BcryptPasswordHasher) -> None:
    with pytest.raises(CredentialIntegrityError):
        hasher.verify("abc", "not-a-bcrypt-digest")


@pytest.mark.parametrize("password", ["한" * 30, "x" * 73])
def test_password_over_72_bytes_never_matches(hasher: BcryptPasswordHasher, password: str) -> None:
    digest = hasher.hash("x" * 72)

    assert hasher.verify(password, digest) is False
