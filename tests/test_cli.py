import io
import os
import unittest
from unittest.mock import patch

from gemini_agent.cli import run_cli
from gemini_agent.core.config import USAGE


class TestRunCLI(unittest.TestCase):
    def setUp(self):
        self.stderr_patcher = patch('sys.stderr', new_callable=io.StringIO)
        self.stderr = self.stderr_patcher.start()

        self.genai_patcher = patch('gemini_agent.cli.genai')
        self.mock_genai = self.genai_patcher.start()

        self.repl_patcher = patch('gemini_agent.cli.AgentCLI.repl')
        self.mock_repl = self.repl_patcher.start()

        self.logging_patcher = patch('gemini_agent.cli.configure_logging')
        self.mock_logging = self.logging_patcher.start()

    def tearDown(self):
        self.stderr_patcher.stop()
        self.genai_patcher.stop()
        self.repl_patcher.stop()
        self.logging_patcher.stop()

    def test_help_variants(self):
        """--help, -h and help print usage to stderr and start nothing"""
        for flag in ("--help", "-h", "help"):
            self.assertIsNone(run_cli([flag]))
            self.assertIn(USAGE, self.stderr.getvalue())

        self.mock_genai.Client.assert_not_called()
        self.mock_repl.assert_not_called()

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_key(self):
        """A missing key prints the error and usage, then returns normally"""
        self.assertIsNone(run_cli([]))

        output = self.stderr.getvalue()
        self.assertIn("Missing configuration values: gemini_api_key", output)
        self.assertIn(USAGE, output)
        self.mock_genai.Client.assert_not_called()
        self.mock_repl.assert_not_called()

    @patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}, clear=True)
    def test_flag_overrides_env(self):
        run_cli(["--gemini-api-key", "flag-key"])

        self.mock_genai.Client.assert_called_once_with(api_key="flag-key")
        self.mock_repl.assert_called_once()

    @patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}, clear=True)
    def test_shared_client_and_model(self):
        """One client is built and the chosen model reaches the session"""
        run_cli(["--model", "gemini-2.5-pro", "--log-level", "info"])

        self.mock_genai.Client.assert_called_once_with(api_key="env-key")
        client = self.mock_genai.Client.return_value
        create_kwargs = client.aio.chats.create.call_args.kwargs
        self.assertEqual(create_kwargs["model"], "gemini-2.5-pro")
        self.mock_logging.assert_called_once_with("INFO")
