import os
import unittest
from unittest.mock import patch

from gitrelease.config.loader import ConfigError, load_config


class TestConfigLoader(unittest.TestCase):
    def test_missing_token(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            load_config({})
        self.assertIn("GITHUB_TOKEN", str(ctx.exception))

    def test_blank_token(self) -> None:
        with self.assertRaises(ConfigError):
            load_config({"GITHUB_TOKEN": "   "})

    def test_defaults(self) -> None:
        config = load_config({"GITHUB_TOKEN": "abc"})
        self.assertEqual(config, {
            "token": "abc",
            "api_url": "https://api.github.com",
            "request_timeout": 30.0,
        })

    def test_reads_os_environ(self) -> None:
        with patch.dict(os.environ, {"GITHUB_TOKEN": "from-env"}):
            self.assertEqual(load_config()["token"], "from-env")

    def test_custom_api_url_and_timeout(self) -> None:
        config = load_config({
            "GITHUB_TOKEN": "abc",
            "GITRELEASE_API_URL": "https://ghe.example.com/api/v3/",
            "GITRELEASE_TIMEOUT": "2.5",
        })
        self.assertEqual(config["api_url"], "https://ghe.example.com/api/v3")
        self.assertEqual(config["request_timeout"], 2.5)

    def test_invalid_values(self) -> None:
        cases = [
            {"GITRELEASE_API_URL": "ftp://example.com"},
            {"GITRELEASE_TIMEOUT": "soon"},
            {"GITRELEASE_TIMEOUT": "0"},
            {"GITRELEASE_TIMEOUT": "-3"},
        ]
        for extra in cases:
            with self.subTest(extra=extra):
                with self.assertRaises(ConfigError):
                    load_config({"GITHUB_TOKEN": "abc", **extra})


if __name__ == "__main__":
    unittest.main()
