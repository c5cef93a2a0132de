"""Unit tests for configuration and the clock."""

import os
import unittest
from datetime import date, datetime
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytz

from flowparse.core import clock
from flowparse.core.config import Settings, bootstrap_env, get_settings
from flowparse.platform.errors import ConfigError


class TestGetSettings(unittest.TestCase):
    """Test settings resolution from environment variables."""

    def test_defaults(self):
        """Test an empty environment yields defaults."""
        settings = get_settings({})

        self.assertEqual(settings, Settings())
        self.assertEqual(settings.log_level, "INFO")
        self.assertFalse(settings.structured_logging)
        self.assertEqual(settings.tzinfo.zone, "UTC")

    def test_values_are_normalised(self):
        """Test case and whitespace are tolerated."""
        settings = get_settings(
            {
                "LOG_LEVEL": " debug ",
                "FC_LOG_FORMAT": "JSON",
                "FC_DEFAULT_TIMEZONE": "America/Denver",
                "FC_ENV": "Production",
            }
        )

        self.assertEqual(settings.log_level, "DEBUG")
        self.assertTrue(settings.structured_logging)
        self.assertEqual(settings.timezone, "America/Denver")
        self.assertEqual(settings.env, "production")

    def test_unknown_timezone(self):
        """Test an unknown timezone is a configuration error."""
        with self.assertRaises(ConfigError) as ctx:
            get_settings({"FC_DEFAULT_TIMEZONE": "Mars/Olympus"})

        self.assertEqual(ctx.exception.config_key, "FC_DEFAULT_TIMEZONE")
        self.assertEqual(ctx.exception.error_code, "CONFIG_INVALID")
        self.assertIn("FC_DEFAULT_TIMEZONE", ctx.exception.user_hint)

    def test_unknown_log_level(self):
        with self.assertRaises(ConfigError):
            get_settings({"LOG_LEVEL": "chatty"})

    def test_unknown_log_format(self):
        with self.assertRaises(ConfigError):
            get_settings({"FC_LOG_FORMAT": "xml"})

    def test_reads_process_environment(self):
        """Test os.environ is used when no mapping is given."""
        with patch.dict(os.environ, {"LOG_LEVEL": "warning"}):
            self.assertEqual(get_settings().log_level, "WARNING")


class TestBootstrapEnv(unittest.TestCase):
    """Test .env loading."""

    def test_loads_env_file_from_parent(self):
        """Test a .env in a parent directory is found and not overriding."""
        with TemporaryDirectory() as tmp, patch.dict(
            os.environ, {"FC_ENV": "local", "FLOWPARSE_KEEP": "mine"}
        ):
            root = Path(tmp)
            (root / ".env").write_text("FLOWPARSE_SAMPLE=from-file\nFLOWPARSE_KEEP=theirs\n")
            nested = root / "a" / "b"
            nested.mkdir(parents=True)

            self.assertTrue(bootstrap_env(nested))
            self.assertEqual(os.environ["FLOWPARSE_SAMPLE"], "from-file")
            self.assertEqual(os.environ["FLOWPARSE_KEEP"], "mine")

    def test_skipped_outside_local(self):
        """Test non-local environments do not read .env files."""
        with TemporaryDirectory() as tmp, patch.dict(
            os.environ, {"FC_ENV": "production", "FC_AUTO_LOAD_ENV": "0"}
        ):
            (Path(tmp) / ".env").write_text("FLOWPARSE_SKIPPED=1\n")

            self.assertFalse(bootstrap_env(Path(tmp)))
            self.assertNotIn("FLOWPARSE_SKIPPED", os.environ)


class TestClock(unittest.TestCase):
    """Test date resolution in a timezone."""

    def test_today_returns_date(self):
        self.assertIsInstance(clock.today("UTC"), date)

    def test_now_is_aware_in_zone(self):
        current = clock.now("America/Denver")

        self.assertIsInstance(current, datetime)
        self.assertEqual(current.tzinfo.zone, "America/Denver")

    def test_uses_configured_zone(self):
        """Test the zone comes from settings when not given."""
        with patch.dict(os.environ, {"FC_DEFAULT_TIMEZONE": "Asia/Tokyo"}):
            self.assertEqual(clock.now().tzinfo.zone, "Asia/Tokyo")

    def test_ignores_unrelated_settings(self):
        """Test a bad logging variable does not affect the clock."""
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose", "FC_DEFAULT_TIMEZONE": "Asia/Tokyo"}):
            self.assertEqual(clock.now().tzinfo.zone, "Asia/Tokyo")

    def test_unknown_zone_falls_back_to_utc(self):
        """Test an unknown configured zone resolves in UTC."""
        with patch.dict(os.environ, {"FC_DEFAULT_TIMEZONE": "Mars/Olympus"}):
            with self.assertLogs("flowparse.core.clock", level="WARNING"):
                self.assertEqual(clock.default_timezone(), pytz.utc)
