"""Settings validation."""

import unittest

from pydantic import SecretStr, ValidationError

from support import make_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = make_settings()
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.PORT, 5000)
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertEqual(settings.ACTIVITY_FEED_LIMIT, 10)
        self.assertFalse(settings.JWT_CHECK_TOKEN_VERSION)

    def test_database_url_schemes(self) -> None:
        for url in ("postgresql+psycopg2://u:p@db/chamalog", "sqlite:///chamalog.db"):
            with self.subTest(url=url):
                self.assertEqual(make_settings(DATABASE_URL=url).DATABASE_URL, url)
        for url in ("", "   ", "mysql://u:p@db/chamalog"):
            with self.subTest(url=url):
                with self.assertRaises(ValidationError):
                    make_settings(DATABASE_URL=url)

    def test_api_prefix_is_normalized(self) -> None:
        self.assertEqual(make_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        self.assertEqual(make_settings(API_PREFIX="").API_PREFIX, "")
        with self.assertRaises(ValidationError):
            make_settings(API_PREFIX="api")

    def test_jwt_secret_required(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_SECRET=SecretStr("  "))

    def test_jwt_expiry_bounds(self) -> None:
        self.assertEqual(make_settings(JWT_EXPIRE_MINUTES=10080).JWT_EXPIRE_MINUTES, 10080)
        for minutes in (0, 10081):
            with self.subTest(minutes=minutes):
                with self.assertRaises(ValidationError):
                    make_settings(JWT_EXPIRE_MINUTES=minutes)

    def test_activity_feed_limit_bounds(self) -> None:
        for limit in (0, 101):
            with self.subTest(limit=limit):
                with self.assertRaises(ValidationError):
                    make_settings(ACTIVITY_FEED_LIMIT=limit)

    def test_urls_must_be_http(self) -> None:
        settings = make_settings(LABEL_TRACKING_BASE_URL="https://track.chamalog.com/r/")
        self.assertEqual(settings.LABEL_TRACKING_BASE_URL, "https://track.chamalog.com/r")
        with self.assertRaises(ValidationError):
            make_settings(POSTAL_CODE_API_URL="ftp://viacep.com.br/ws")

    def test_postal_code_timeout_bounds(self) -> None:
        for timeout in (0, -1, 61):
            with self.subTest(timeout=timeout):
                with self.assertRaises(ValidationError):
                    make_settings(POSTAL_CODE_TIMEOUT_SEC=timeout)


if __name__ == "__main__":
    unittest.main()
