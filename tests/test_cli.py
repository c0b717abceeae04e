"""Tests for the click CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from topiko import cli as cli_module
from topiko.cli import cli
from topiko.logging import configure_logging

if TYPE_CHECKING:
    from pathlib import Path

# None removes the variable for the duration of invoke().
CLEAN_ENV = {
    "SMS_API_KEY": None,
    "SUPABASE_URL": None,
    "SUPABASE_KEY": None,
    "RULES_PATH": None,
}

PREMIUM_ARGS = [
    "score",
    "--goal",
    "app",
    "--goal",
    "brand",
    "--status",
    "no_results",
    "--budget",
    "25k_plus",
    "--challenge",
    "dont_know",
]


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # structlog binds its output stream at configure time, and the runner's
    # streams are gone once invoke() returns. Configure once, outside it.
    configure_logging(log_level="WARNING")
    monkeypatch.setattr(cli_module, "configure_logging", lambda **_: None)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


class TestScore:
    def test_text_report(self, runner: CliRunner):
        result = runner.invoke(cli, PREMIUM_ARGS, env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "Readiness: 76/100 (Nearly Ready)" in result.output
        assert "Recommended: HEBT (₹25,000+/month, 4-8 weeks) - 95% match" in result.output
        assert "marketing=90% website=80% branding=95%" in result.output

    def test_json_report(self, runner: CliRunner):
        result = runner.invoke(cli, [*PREMIUM_ARGS, "--json"], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["overall"]["totalScore"] == 76
        assert data["solutionMatch"] == 95

    def test_from_json_file(self, runner: CliRunner, tmp_path: Path):
        answers = tmp_path / "answers.json"
        answers.write_text(
            json.dumps(
                {
                    "goals": ["more_customers"],
                    "digitalStatus": "no_presence",
                    "budget": "below_2k",
                    "challenge": "no_leads",
                }
            ),
            encoding="utf-8",
        )
        result = runner.invoke(cli, ["score", "--from-json", str(answers)], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "Readiness: 38/100 (Early Stage)" in result.output
        assert "Recommended: Disblay" in result.output

    def test_no_answers(self, runner: CliRunner):
        result = runner.invoke(cli, ["score"], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "Readiness: 0/100 (Just Beginning)" in result.output

    def test_unknown_choice_rejected(self, runner: CliRunner):
        result = runner.invoke(cli, ["score", "--budget", "millions"], env=CLEAN_ENV)
        assert result.exit_code == 2


class TestRules:
    def test_prints_table(self, runner: CliRunner):
        result = runner.invoke(cli, ["rules"], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["weights"]["digitalStatus"] == 0.3
        assert data["goals"]["app"]["base"] == 30

    def test_writes_file_and_reloads(self, runner: CliRunner, tmp_path: Path):
        out = tmp_path / "rules.json"
        result = runner.invoke(cli, ["rules", "--output", str(out)], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "Rule table written" in result.output

        env = {**CLEAN_ENV, "RULES_PATH": str(out)}
        check = runner.invoke(cli, ["check"], env=env)
        assert check.exit_code == 0, check.output
        assert str(out) in check.output


class TestSendOtp:
    def test_mock_send(self, runner: CliRunner):
        result = runner.invoke(cli, ["send-otp", "9876543210", "--otp", "4821"], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "OTP 4821 sent to 9876543210" in result.output

    def test_invalid_mobile(self, runner: CliRunner):
        result = runner.invoke(cli, ["send-otp", "12345"], env=CLEAN_ENV)
        assert result.exit_code == 2
        assert "Invalid mobile number" in result.output


class TestCheck:
    def test_unconfigured(self, runner: CliRunner):
        result = runner.invoke(cli, ["check"], env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "mock mode" in result.output
        assert "offline" in result.output
        assert "built-in defaults" in result.output

    def test_invalid_rule_file(self, runner: CliRunner, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"weights": {"goals": 0.9}}', encoding="utf-8")
        result = runner.invoke(cli, ["check"], env={**CLEAN_ENV, "RULES_PATH": str(bad)})
        assert result.exit_code == 1
        assert "INVALID" in result.output
