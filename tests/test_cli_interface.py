"""Tests for the interactive email configuration prompt."""
import pytest

import cli_interface
import schedule_manager
from cli_interface import prompt_credentials_cli
from schedule_manager import ScheduleManager


@pytest.fixture
def manager(tmp_path):
    return ScheduleManager(credentials_file=tmp_path / "credentials.ini", env_file=tmp_path / ".env")


def feed(monkeypatch, answers):
    """Answer input() prompts in order; EOFError once the answers run out."""
    answers = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr("builtins.input", fake_input)


class TestPromptCredentials:

    def test_full_answers_save_settings_and_password(self, manager, tmp_path, monkeypatch):
        feed(monkeypatch, ["me@example.com", "bot@example.com", "mail.example.com", "2525", ""])
        monkeypatch.setattr(cli_interface.getpass, "getpass", lambda prompt="": "s3cret")
        stored = {}
        monkeypatch.setattr(schedule_manager.keyring, "set_password",
                            lambda service, user, pw: stored.update({user: pw}))

        assert prompt_credentials_cli(manager) is True
        text = (tmp_path / "credentials.ini").read_text(encoding="utf-8")
        assert "email_to = me@example.com" in text
        assert "smtp_port = 2525" in text
        assert "smtp_user = bot@example.com" in text  # blank answer falls back to sender
        assert stored == {"bot@example.com": "s3cret"}

    def test_interrupted_mid_prompt_saves_nothing(self, manager, tmp_path, monkeypatch):
        feed(monkeypatch, ["me@example.com"])
        assert prompt_credentials_cli(manager) is False
        assert not (tmp_path / "credentials.ini").exists()
        assert manager.credentials['email_to'] != "me@example.com"

    def test_interrupted_password_keeps_settings(self, manager, tmp_path, monkeypatch):
        feed(monkeypatch, ["me@example.com", "bot@example.com", "", "", ""])

        def closed(prompt=""):
            raise EOFError
        monkeypatch.setattr(cli_interface.getpass, "getpass", closed)
        monkeypatch.setattr(schedule_manager.keyring, "set_password",
                            lambda *a: pytest.fail("no password to store"))

        assert prompt_credentials_cli(manager) is True
        assert (tmp_path / "credentials.ini").exists()
