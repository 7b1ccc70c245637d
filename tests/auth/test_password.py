"""Tests for password hashing."""

import pytest

from calmnest.auth.password import check_needs_rehash, hash_password, verify_password
from calmnest.errors import CryptoError


class TestPasswordHashing:
    @pytest.mark.parametrize("password", ["secret1", "correct horse battery staple", "pässwörd-ü", "x" * 128])
    def test_hash_and_verify(self, password):
        hashed = hash_password(password)
        assert verify_password(password, hashed) is True

    def test_wrong_password_rejected(self):
        hashed = hash_password("secret1")
        assert verify_password("secret2", hashed) is False

    def test_salt_is_random(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_hash_is_argon2id(self):
        assert hash_password("secret1").startswith("$argon2id$")

    def test_hash_never_contains_plaintext(self):
        assert "secret1" not in hash_password("secret1")

    def test_check_needs_rehash(self):
        assert check_needs_rehash(hash_password("secret1")) is False

    def test_malformed_digest_raises_crypto_error(self):
        with pytest.raises(CryptoError):
            verify_password("secret1", "not-a-real-hash")
