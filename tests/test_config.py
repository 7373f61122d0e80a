"""Unit tests for user_management.core.config validators."""

import unittest

from pydantic import ValidationError

from user_management.core.config import Settings


class TestDatabaseUrl(unittest.TestCase):
    def test_postgres_and_sqlite_accepted(self) -> None:
        for url in ("postgresql+psycopg2://u:p@db:5432/users", "sqlite://", "sqlite:///./users.db"):
            with self.subTest(url=url):
                self.assertEqual(Settings(DATABASE_URL=f"  {url} ").DATABASE_URL, url)

    def test_other_schemes_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://u:p@db/users")

    def test_blank_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="   ")


class TestOtherSettings(unittest.TestCase):
    def test_prefix_normalized(self) -> None:
        self.assertEqual(Settings(API_V1_PREFIX="/v1/api/").API_V1_PREFIX, "/v1/api")

    def test_prefix_needs_leading_slash(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(API_V1_PREFIX="v1/api")

    def test_bcrypt_rounds_bounds(self) -> None:
        self.assertEqual(Settings(BCRYPT_ROUNDS=10).BCRYPT_ROUNDS, 10)
        for rounds in (3, 32):
            with self.subTest(rounds=rounds):
                with self.assertRaises(ValidationError):
                    Settings(BCRYPT_ROUNDS=rounds)

    def test_log_level_case_insensitive(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(LOG_LEVEL="chatty")

    def test_logging_toggles(self) -> None:
        s = Settings(LOG_REQUESTS=False, LOG_RESPONSES=True)
        self.assertFalse(s.LOG_REQUESTS)
        self.assertTrue(s.LOG_RESPONSES)
