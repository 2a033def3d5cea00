"""Tests for TokenIssuer: issue/verify, expiry against a pinned clock, tampering."""

import unittest
import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt

from roster.core.errors import Unauthorized
from roster.core.security import TokenIssuer

SECRET = "test-secret-with-enough-length-32b"
NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


class TestIssueAndVerify(unittest.TestCase):
    def setUp(self) -> None:
        self.issuer = TokenIssuer(SECRET, lifetime_minutes=60)
        self.account_id = uuid.uuid4()

    def test_round_trip(self) -> None:
        token = self.issuer.issue(self.account_id, now=NOW)
        claims = self.issuer.verify(token, now=NOW + timedelta(minutes=5))
        self.assertEqual(claims.sub, str(self.account_id))
        self.assertEqual(claims.iat, NOW)
        self.assertEqual(claims.exp, NOW + timedelta(minutes=60))

    def test_round_trip_with_real_clock(self) -> None:
        claims = self.issuer.verify(self.issuer.issue(self.account_id))
        self.assertEqual(claims.sub, str(self.account_id))

    def test_valid_until_exp_inclusive(self) -> None:
        token = self.issuer.issue(self.account_id, now=NOW)
        self.issuer.verify(token, now=NOW + timedelta(minutes=60))
        with self.assertRaises(Unauthorized):
            self.issuer.verify(token, now=NOW + timedelta(minutes=60, seconds=1))

    def test_lifetime_override(self) -> None:
        token = self.issuer.issue(self.account_id, now=NOW, lifetime_minutes=1)
        with self.assertRaises(Unauthorized):
            self.issuer.verify(token, now=NOW + timedelta(minutes=2))

    def test_naive_now_is_treated_as_utc(self) -> None:
        token = self.issuer.issue(self.account_id, now=NOW.replace(tzinfo=None))
        claims = self.issuer.verify(token, now=NOW.replace(tzinfo=None))
        self.assertEqual(claims.iat, NOW)


class TestRejectedTokens(unittest.TestCase):
    def setUp(self) -> None:
        self.issuer = TokenIssuer(SECRET)

    def test_other_secret(self) -> None:
        token = TokenIssuer("another-secret-with-enough-length").issue(uuid.uuid4(), now=NOW)
        with self.assertRaises(Unauthorized):
            self.issuer.verify(token, now=NOW)

    def test_tampered_payload(self) -> None:
        token = self.issuer.issue(uuid.uuid4(), now=NOW)
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {"sub": str(uuid.uuid4()), "iat": NOW, "exp": NOW + timedelta(days=1)},
            "guess",
            algorithm="HS256",
        ).split(".")[1]
        with self.assertRaises(Unauthorized):
            self.issuer.verify(".".join([header, forged, signature]), now=NOW)

    def test_garbage(self) -> None:
        for token in ("", "abc", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(Unauthorized):
                    self.issuer.verify(token, now=NOW)

    def test_missing_subject(self) -> None:
        token = jwt.encode({"iat": NOW, "exp": NOW + timedelta(hours=1)}, SECRET, algorithm="HS256")
        with self.assertRaises(Unauthorized):
            self.issuer.verify(token, now=NOW)


class TestConstruction(unittest.TestCase):
    def test_empty_secret_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenIssuer("")

    def test_from_settings(self) -> None:
        settings = MagicMock()
        settings.JWT_SECRET.get_secret_value.return_value = SECRET
        settings.JWT_ALGORITHM = "HS256"
        settings.JWT_EXPIRE_MINUTES = 15
        issuer = TokenIssuer.from_settings(settings)
        self.assertEqual(issuer.lifetime_minutes, 15)
        token = issuer.issue("abc", now=NOW)
        self.assertEqual(issuer.verify(token, now=NOW).exp, NOW + timedelta(minutes=15))


if __name__ == "__main__":
    unittest.main()
