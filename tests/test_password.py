"""
Tests for bcrypt password hashing.
"""

from auth.password import hash_password, verify_password


class TestHashPassword:
    def test_default_work_factor_is_10(self):
        hashed = hash_password("longenough1")
        assert hashed.startswith("$2b$10$")

    def test_never_stores_raw_password(self):
        hashed = hash_password("longenough1", rounds=4)
        assert "longenough1" not in hashed

    def test_salted_per_call(self):
        assert hash_password("longenough1", rounds=4) != hash_password("longenough1", rounds=4)

    def test_long_passwords_do_not_raise(self):
        hashed = hash_password("x" * 200, rounds=4)
        assert verify_password("x" * 200, hashed)


class TestVerifyPassword:
    def test_matches_original(self):
        hashed = hash_password("longenough1", rounds=4)
        assert verify_password("longenough1", hashed) is True

    def test_single_character_mutations_fail(self):
        password = "longenough1"
        hashed = hash_password(password, rounds=4)
        mutations = set()
        for i, ch in enumerate(password):
            replacement = "a" if ch != "a" else "b"
            mutations.add(password[:i] + replacement + password[i + 1:])
            mutations.add(password[:i] + password[i + 1:])
        mutations.add(password + "!")
        for candidate in mutations:
            assert verify_password(candidate, hashed) is False, candidate

    def test_malformed_hash_returns_false(self):
        assert verify_password("longenough1", "not-a-bcrypt-hash") is False
        assert verify_password("longenough1", "") is False
