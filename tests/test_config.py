import unittest

from gemini_agent.core.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MODEL,
    Config,
    ConfigError,
    get_config,
)


class TestGetConfig(unittest.TestCase):
    def test_key_from_option(self):
        config = get_config({"gemini_api_key": "from-flag"}, environ={})
        self.assertEqual(config, Config(gemini_api_key="from-flag"))
        self.assertEqual(config.model, DEFAULT_MODEL)
        self.assertEqual(config.log_level, DEFAULT_LOG_LEVEL)

    def test_key_from_environment(self):
        config = get_config({}, environ={"GEMINI_API_KEY": "from-env"})
        self.assertEqual(config.gemini_api_key, "from-env")

    def test_option_overrides_environment(self):
        config = get_config(
            {"gemini_api_key": "from-flag", "model": None},
            environ={"GEMINI_API_KEY": "from-env", "GEMINI_MODEL": "gemini-pro"},
        )
        self.assertEqual(config.gemini_api_key, "from-flag")
        self.assertEqual(config.model, "gemini-pro")

    def test_missing_key(self):
        """Without flag or env var the error lists the missing key"""
        with self.assertRaises(ConfigError) as ctx:
            get_config({"gemini_api_key": None}, environ={})
        self.assertEqual(
            str(ctx.exception), "Missing configuration values: gemini_api_key"
        )

    def test_blank_key_is_missing(self):
        with self.assertRaises(ConfigError):
            get_config({"gemini_api_key": "   "}, environ={"GEMINI_API_KEY": ""})

    def test_log_level(self):
        config = get_config(
            {"gemini_api_key": "k"}, environ={"GEMINI_AGENT_LOG_LEVEL": "debug"}
        )
        self.assertEqual(config.log_level, "DEBUG")

        with self.assertRaises(ConfigError):
            get_config({"gemini_api_key": "k", "log_level": "chatty"}, environ={})

    def test_config_is_read_only(self):
        config = get_config({"gemini_api_key": "k"}, environ={})
        with self.assertRaises(AttributeError):
            config.gemini_api_key = "other"
