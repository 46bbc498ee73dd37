"""Tests for ScheduleManager: credentials, exports and the mail hand-off."""
import keyring.errors
import pytest

import schedule_manager
from errors import ExportError, InputFormatError, MailError
from schedule_manager import ScheduleManager


@pytest.fixture
def manager(tmp_path):
    return ScheduleManager(
        start_day="2024-01-01",
        file_name="hrtschedule",
        output_dir=tmp_path / "out",
        credentials_file=tmp_path / "credentials.ini",
        env_file=tmp_path / ".env",
    )


def write_ini(path, **values):
    lines = ["[Email]"] + [f"{k} = {v}" for k, v in values.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


class TestStartDay:

    @pytest.mark.parametrize("bad", ["not-a-date", "2024-13-01", "2024/01/01", ""])
    def test_invalid_start_day(self, bad, tmp_path):
        with pytest.raises(InputFormatError):
            ScheduleManager(start_day=bad, output_dir=tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_output_paths(self, manager, tmp_path):
        assert manager.output_path("xlsx") == tmp_path / "out" / "hrtschedule2024-01-01.xlsx"
        assert manager.output_path("docx") == tmp_path / "out" / "hrtschedule2024-01-01.docx"

    def test_build_rows(self, manager):
        rows = manager.build_rows()
        assert len(rows) == 28
        assert rows[0].dosage_text == "6\n\n1"


class TestSaveGeneratedFiles:

    def test_both(self, manager, tmp_path):
        files = manager.save_generated_files("both")
        assert set(files) == {"spreadsheet", "document"}
        assert (tmp_path / "out" / "hrtschedule2024-01-01.xlsx").exists()
        assert (tmp_path / "out" / "hrtschedule2024-01-01.docx").exists()

    def test_spreadsheet_only(self, manager, tmp_path):
        files = manager.save_generated_files("xlsx")
        assert list(files) == ["spreadsheet"]
        assert not (tmp_path / "out" / "hrtschedule2024-01-01.docx").exists()

    def test_spreadsheet_failure_stops_before_document(self, manager, tmp_path, monkeypatch):
        def broken(self):
            raise ExportError("cannot write")
        monkeypatch.setattr(ScheduleManager, "export_spreadsheet", broken)
        with pytest.raises(ExportError):
            manager.save_generated_files("both")
        assert not (tmp_path / "out" / "hrtschedule2024-01-01.docx").exists()

    def test_unknown_format(self, manager):
        with pytest.raises(ValueError):
            manager.save_generated_files("pdf")


class TestCredentials:

    def test_defaults_without_files(self, manager):
        creds = manager.load_credentials()
        assert creds['smtp_server'] == "smtp.gmail.com"
        assert creds['smtp_port'] == 587
        assert 'smtp_pass' not in creds  # the secret never lives in the settings dict

    def test_ini_file(self, manager, tmp_path):
        write_ini(tmp_path / "credentials.ini", email_to="me@example.com", email_from="bot@example.com",
                  smtp_server="mail.example.com", smtp_port="2525")
        creds = manager.load_credentials()
        assert creds['email_to'] == "me@example.com"
        assert creds['smtp_server'] == "mail.example.com"
        assert creds['smtp_port'] == 2525
        assert creds['smtp_user'] == "bot@example.com"  # falls back to sender

    def test_bad_port_in_ini(self, manager, tmp_path):
        write_ini(tmp_path / "credentials.ini", smtp_port="many")
        with pytest.raises(MailError):
            manager.load_credentials()

    def test_env_file_overrides_ini(self, manager, tmp_path):
        write_ini(tmp_path / "credentials.ini", email_to="me@example.com", email_from="bot@example.com")
        (tmp_path / ".env").write_text("EMAIL_TO=other@example.com\nSMTP_PORT=465\nSENDER_PASSWORD=from-env\n")
        creds = manager.load_credentials()
        assert creds['email_to'] == "other@example.com"
        assert creds['smtp_port'] == 465
        assert manager.get_password() == "from-env"

    def test_save_credentials_round_trip(self, manager, tmp_path):
        manager.credentials.update(email_to="me@example.com", email_from="bot@example.com",
                                   smtp_user="bot@example.com", smtp_port=2525)
        assert manager.save_credentials()
        text = (tmp_path / "credentials.ini").read_text(encoding="utf-8")
        assert "smtp_port = 2525" in text
        assert "password" not in text

        fresh = ScheduleManager(credentials_file=tmp_path / "credentials.ini", env_file=tmp_path / ".env")
        assert fresh.load_credentials()['email_to'] == "me@example.com"


class TestPassword:

    def test_environment_wins(self, manager, monkeypatch):
        monkeypatch.setenv("SENDER_PASSWORD", "env-pass")
        monkeypatch.setattr(schedule_manager.keyring, "get_password", lambda *a: pytest.fail("keyring used"))
        assert manager.get_password() == "env-pass"

    def test_keyring_fallback(self, manager, monkeypatch):
        manager.credentials['smtp_user'] = "bot@example.com"
        monkeypatch.setattr(schedule_manager.keyring, "get_password",
                            lambda service, user: "ring-pass" if user == "bot@example.com" else None)
        assert manager.get_password() == "ring-pass"

    def test_not_found(self, manager, monkeypatch):
        manager.credentials['smtp_user'] = "bot@example.com"
        monkeypatch.setattr(schedule_manager.keyring, "get_password", lambda service, user: None)
        with pytest.raises(MailError, match="not found"):
            manager.get_password()

    def test_no_keyring_backend(self, manager, monkeypatch):
        manager.credentials['smtp_user'] = "bot@example.com"

        def no_backend(service, user):
            raise keyring.errors.NoKeyringError("no backend")
        monkeypatch.setattr(schedule_manager.keyring, "get_password", no_backend)
        with pytest.raises(MailError, match="no keyring backend"):
            manager.get_password()

    def test_no_user(self, manager):
        with pytest.raises(MailError):
            manager.get_password()

    def test_store_password(self, manager, monkeypatch):
        stored = {}
        manager.credentials['smtp_user'] = "bot@example.com"
        monkeypatch.setattr(schedule_manager.keyring, "set_password",
                            lambda service, user, pw: stored.update({(service, user): pw}))
        manager.store_password("new-pass")
        assert stored == {("hrt_schedule_email", "bot@example.com"): "new-pass"}


class TestSendEmail:

    def test_uses_configured_recipient(self, manager, tmp_path, monkeypatch):
        write_ini(tmp_path / "credentials.ini", email_to="me@example.com", email_from="bot@example.com")
        monkeypatch.setenv("SENDER_PASSWORD", "pw")
        sent = []
        monkeypatch.setattr(schedule_manager, "send_email_with_attachment",
                            lambda path, recipient, creds, password: sent.append((path, recipient, password)) or "ok")
        assert manager.send_email_with_attachments("file.docx") == "ok"
        assert sent == [("file.docx", "me@example.com", "pw")]

    def test_recipient_override(self, manager, monkeypatch):
        monkeypatch.setenv("SENDER_PASSWORD", "pw")
        sent = []
        monkeypatch.setattr(schedule_manager, "send_email_with_attachment",
                            lambda path, recipient, creds, password: sent.append(recipient) or "ok")
        manager.send_email_with_attachments("file.docx", "you@example.com")
        assert sent == ["you@example.com"]

    def test_missing_password_is_mail_error(self, manager, monkeypatch):
        monkeypatch.setattr(schedule_manager.keyring, "get_password", lambda service, user: None)
        with pytest.raises(MailError):
            manager.send_email_with_attachments("file.docx", "you@example.com")
