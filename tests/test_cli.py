"""Tests for the flowparse command line."""

import json
from unittest.mock import patch

import pytest
import yaml

from flowparse import cli


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the CLI from reconfiguring the root logger during tests."""
    with patch("flowparse.cli.setup_structured_logging") as setup, patch(
        "flowparse.cli.bootstrap_env", return_value=False
    ):
        yield setup


class TestParseCommand:
    """Test `flowparse parse`."""

    def test_json_output(self, capsys):
        code = cli.main(
            ["parse", "--date", "2024-01-15", "--format", "json", "Meeting with John tomorrow at 3pm"]
        )

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["title"] == "Meeting with John"
        assert payload["dueDate"] == "2024-01-16"
        assert payload["dueTime"] == "15:00"

    def test_words_are_joined(self, capsys):
        cli.main(["parse", "--date", "2024-01-15", "--format", "json", "Pay", "rent", "today"])

        payload = json.loads(capsys.readouterr().out)
        assert payload["originalInput"] == "Pay rent today"
        assert payload["dueDate"] == "2024-01-15"

    def test_yaml_output(self, capsys):
        cli.main(["parse", "--format", "yaml", "Review reports urgent!!!"])

        payload = yaml.safe_load(capsys.readouterr().out)
        assert payload["priority"] == "high"
        assert payload["title"] == "Review reports"

    def test_text_output(self, capsys):
        cli.main(["parse", "--date", "2024-01-15", "Deep work session for 2 hours"])

        out = capsys.readouterr().out
        assert 'Title: "Deep work session"' in out
        assert "Duration: 120 min" in out
        assert "Confidence:" in out

    def test_bad_date_argument(self, capsys):
        with pytest.raises(SystemExit):
            cli.main(["parse", "--date", "15/01/2024", "anything"])

    def test_configures_logging(self, quiet_logging):
        with patch.dict("os.environ", {"LOG_LEVEL": "debug", "FC_LOG_FORMAT": "json"}):
            cli.main(["parse", "x"])

        quiet_logging.assert_called_once_with("DEBUG", structured=True)


class TestExamplesCommand:
    """Test `flowparse examples`."""

    def test_text_listing(self, capsys):
        assert cli.main(["examples", "--date", "2024-01-15"]) == 0

        out = capsys.readouterr().out
        assert "NLP Testing Results:" in out
        assert '1. "Meeting with John tomorrow at 3pm"' in out
        assert '10. "Plan vacation in 2 weeks #personal"' in out

    def test_json_listing(self, capsys):
        cli.main(["examples", "--format", "json"])

        payload = json.loads(capsys.readouterr().out)
        assert len(payload) == 10
        assert all(0.0 <= item["confidence"] <= 1.0 for item in payload)


class TestErrors:
    def test_config_error_exit_code(self, capsys):
        with patch.dict("os.environ", {"FC_DEFAULT_TIMEZONE": "Nowhere/Special"}):
            code = cli.main(["parse", "anything"])

        assert code == 1
        err = capsys.readouterr().err
        assert "FC_DEFAULT_TIMEZONE" in err

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage: flowparse" in capsys.readouterr().out
