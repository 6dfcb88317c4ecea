"""
core/tests/test_config_service.py

Layer precedence of ConfigService: code < defaults.ini < env < user ini.
Uses unittest to avoid external test dependencies.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from core.config.config_service import DEFAULTS_INI, ConfigService
from field_embedder.models.embed_config import EmbedConfig
from field_embedder.models.field_enums import PagePolicy


class TestConfigService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.no_user_ini = self.tmp / "missing.ini"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _service(self, environ=None, user_ini=None, defaults_ini=None) -> ConfigService:
        return ConfigService(
            defaults_ini=defaults_ini,
            user_ini=user_ini or self.no_user_ini,
            environ=environ or {},
        )

    def test_embedded_defaults(self) -> None:
        svc = self._service()
        self.assertEqual(svc.embedding.page_policy, "lenient")
        self.assertEqual(svc.embedding.reference_width, 612.0)
        self.assertEqual(svc.embedding.checkbox_size, 14.0)
        self.assertEqual(svc.date.language, "id")
        self.assertEqual(svc.meta_source("Embedding", "font_size")["layer"], "code")

    def test_shipped_defaults_ini(self) -> None:
        svc = self._service(defaults_ini=DEFAULTS_INI)
        self.assertEqual(svc.embedding.check_color, "#16a34a")
        self.assertEqual(svc.date.pattern, "")
        self.assertEqual(svc.meta_source("Date", "language")["layer"], "defaults.ini")

    def test_env_overrides_defaults(self) -> None:
        svc = self._service(environ={
            "FIELDEMBED_EMBEDDING__PAGE_POLICY": "strict",
            "FIELDEMBED_DATE__LANGUAGE": "en",
            "FIELDEMBED_BROKEN": "ignored",
            "OTHER_DATE__LANGUAGE": "de",
        })
        self.assertEqual(svc.embedding.page_policy, "strict")
        self.assertEqual(svc.date.language, "en")
        self.assertEqual(svc.meta_source("Date", "language")["layer"], "env")

    def test_user_ini_wins(self) -> None:
        user_ini = self.tmp / "config.ini"
        user_ini.write_text("[Date]\nlanguage = de\n\n[Embedding]\nfont_size = 10\n", encoding="utf-8")
        svc = self._service(environ={"FIELDEMBED_DATE__LANGUAGE": "en"}, user_ini=user_ini)
        self.assertEqual(svc.date.language, "de")
        self.assertEqual(svc.embedding.font_size, 10.0)
        self.assertEqual(svc.meta_source("Date", "language"),
                         {"layer": "user", "source": str(user_ini)})

    def test_get_with_cast(self) -> None:
        svc = self._service()
        self.assertEqual(svc.get("Embedding", "checkbox_size", cast=float), 14.0)
        self.assertEqual(svc.get("Embedding", "font_name"), "Helvetica")
        self.assertIsNone(svc.get("Embedding", "nope"))

    def test_reload_picks_up_changes(self) -> None:
        user_ini = self.tmp / "config.ini"
        svc = self._service(user_ini=user_ini)
        self.assertEqual(svc.date.language, "id")
        user_ini.write_text("[Date]\nlanguage = nl\n", encoding="utf-8")
        svc.reload()
        self.assertEqual(svc.date.language, "nl")


class TestEmbedConfigFromSettings(unittest.TestCase):
    def test_build_from_service(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            svc = ConfigService(
                defaults_ini=None,
                user_ini=Path(tmp) / "missing.ini",
                environ={
                    "FIELDEMBED_EMBEDDING__PAGE_POLICY": "STRICT",
                    "FIELDEMBED_DATE__PATTERN": "{day}/{month}/{year}",
                },
            )
        config = EmbedConfig.from_settings(svc)
        self.assertEqual(config.page_policy, PagePolicy.STRICT)
        self.assertTrue(config.strict_pages)
        self.assertEqual(config.date_pattern, "{day}/{month}/{year}")
        self.assertEqual(config.font_size, 12.0)

    def test_invalid_values_rejected(self) -> None:
        with self.assertRaises(ValueError):
            EmbedConfig(check_color="green")
        with self.assertRaises(ValueError):
            EmbedConfig(page_policy="sometimes")
        with self.assertRaises(ValueError):
            EmbedConfig(date_pattern="{day} {year}")

    def test_with_overrides(self) -> None:
        base = EmbedConfig()
        strict = base.with_overrides(page_policy=PagePolicy.STRICT, date_language="en")
        self.assertFalse(base.strict_pages)
        self.assertTrue(strict.strict_pages)
        self.assertEqual(strict.date_language, "en")


if __name__ == "__main__":
    unittest.main()
