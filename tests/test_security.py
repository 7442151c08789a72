import unittest
from datetime import timedelta

from app.core.exceptions import AuthenticationError, PermissionDenied
from app.core.security import (
    Identity,
    create_access_token,
    ensure_admin,
    get_bearer_token,
    hash_password,
    token_user_id,
    verify_password,
)


class PasswordHashTest(unittest.TestCase):
    def test_round_trip(self):
        stored = hash_password("admin123", rounds=1000)
        self.assertTrue(stored.startswith("pbkdf2_sha256$1000$"))
        self.assertTrue(verify_password("admin123", stored))
        self.assertFalse(verify_password("admin124", stored))

    def test_salts_differ(self):
        self.assertNotEqual(hash_password("same", rounds=1000), hash_password("same", rounds=1000))

    def test_malformed_hash_never_verifies(self):
        self.assertFalse(verify_password("x", "not-a-hash"))
        self.assertFalse(verify_password("x", "md5$1$salt$digest"))


class TokenTest(unittest.TestCase):
    def test_token_carries_user_id(self):
        token = create_access_token(42, role="pharmacist")
        self.assertEqual(token_user_id(token), 42)

    def test_expired_token_is_rejected(self):
        token = create_access_token(42, role="pharmacist", expires_in=timedelta(seconds=-5))
        with self.assertRaises(AuthenticationError):
            token_user_id(token)

    def test_tampered_token_is_rejected(self):
        token = create_access_token(42, role="pharmacist")
        with self.assertRaises(AuthenticationError):
            token_user_id(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))

    def test_bearer_header_parsing(self):
        self.assertEqual(get_bearer_token("Bearer abc"), "abc")
        self.assertEqual(get_bearer_token("bearer abc"), "abc")
        self.assertIsNone(get_bearer_token("Basic abc"))
        self.assertIsNone(get_bearer_token(None))


class RoleTest(unittest.TestCase):
    def test_ensure_admin(self):
        admin = Identity(user_id=1, username="admin", role="admin")
        pharmacist = Identity(user_id=2, username="pat", role="pharmacist")
        self.assertIs(ensure_admin(admin), admin)
        with self.assertRaises(PermissionDenied):
            ensure_admin(pharmacist)


if __name__ == "__main__":
    unittest.main()
