"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import settings
from app.core.errors import InvalidTokenError
from app.core.security import (
    BCRYPT_ROUNDS,
    TOKEN_EXPIRE_HOURS,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

ROLES = [{"id": 1, "value": "USER", "description": "Regular user"}]


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies_and_is_salted(self) -> None:
        first = hash_password("pass1")
        second = hash_password("pass1")
        self.assertNotEqual(first, second)
        self.assertNotEqual(first, "pass1")
        self.assertTrue(verify_password("pass1", first))
        self.assertTrue(verify_password("pass1", second))

    def test_uses_configured_cost(self) -> None:
        # bcrypt digest format: $2b$<cost>$...
        self.assertEqual(hash_password("pass1").split("$")[2], f"{BCRYPT_ROUNDS:02d}")

    def test_wrong_password_returns_false(self) -> None:
        self.assertFalse(verify_password("other", hash_password("pass1")))

    def test_malformed_digest_returns_false(self) -> None:
        self.assertFalse(verify_password("pass1", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    def test_round_trip_claims(self) -> None:
        token = create_access_token(user_id=7, email="a@x.com", roles=ROLES)
        claims = decode_access_token(token)
        self.assertEqual(claims.id, 7)
        self.assertEqual(claims.email, "a@x.com")
        self.assertEqual(claims.role_values(), {"USER"})
        self.assertEqual(claims.roles[0].description, "Regular user")
        self.assertEqual(claims.exp - claims.iat, TOKEN_EXPIRE_HOURS * 3600)

    def test_wire_payload_shape(self) -> None:
        token = create_access_token(user_id=7, email="a@x.com", roles=ROLES)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(set(payload), {"email", "id", "roles", "iat", "exp"})
        self.assertEqual(payload["roles"], ROLES)

    def test_expired_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=TOKEN_EXPIRE_HOURS, minutes=1)
        token = create_access_token(user_id=7, email="a@x.com", roles=ROLES, issued_at=issued)
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_token_signed_with_other_secret_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"email": "a@x.com", "id": 7, "roles": ROLES, "iat": now, "exp": now + timedelta(hours=1)},
            "some-other-secret-that-is-long-enough",
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_tampered_payload_rejected(self) -> None:
        token = create_access_token(user_id=7, email="a@x.com", roles=ROLES)
        header, _payload, signature = token.split(".")
        forged = create_access_token(
            user_id=1, email="a@x.com", roles=[{"id": 2, "value": "ADMIN", "description": "x"}]
        ).split(".")[1]
        with self.assertRaises(InvalidTokenError):
            decode_access_token(f"{header}.{forged}.{signature}")

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            decode_access_token("not.a.jwt")

    def test_missing_claims_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "7", "iat": now, "exp": now + timedelta(hours=1)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_missing_expiry_rejected(self) -> None:
        token = jwt.encode(
            {"email": "a@x.com", "id": 7, "roles": ROLES, "iat": datetime.now(UTC)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
