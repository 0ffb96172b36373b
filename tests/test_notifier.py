"""Tests for reset email delivery."""

import logging
import smtplib
from unittest.mock import patch

import pytest

from app.config import Settings
from app.exceptions import EmailDeliveryError
from app.services.notifier import RESET_SUBJECT, ResetNotifier

RESET_URL = "http://frontend.test/reset-password?token=" + "ab" * 32


def make_settings(configured: bool = True, app_env: str = "development") -> Settings:
    settings = Settings()
    settings.APP_ENV = app_env
    settings.SMTP_HOST = "smtp.example.com"
    settings.SMTP_PORT = 587
    settings.SMTP_USER = "mailer@example.com" if configured else ""
    settings.SMTP_PASSWORD = "app-password" if configured else ""
    settings.MAIL_FROM = "no-reply@example.com"
    return settings


class TestRendering:
    def test_body_contains_link_and_expiry(self):
        html = ResetNotifier(make_settings()).render(RESET_URL)
        assert f'href="{RESET_URL}"' in html
        assert "60 minutes" in html
        assert "If you didn't request this" in html

    def test_message_headers(self):
        message = ResetNotifier(make_settings()).build_message("a@x.com", RESET_URL)
        assert message["Subject"] == RESET_SUBJECT
        assert message["To"] == "a@x.com"
        assert message["From"] == "no-reply@example.com"


class TestSmtpDelivery:
    def test_sends_over_starttls(self):
        with patch("app.services.notifier.smtplib.SMTP") as mock_smtp:
            ResetNotifier(make_settings()).send_reset_email("a@x.com", RESET_URL)

        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=10)
        server = mock_smtp.return_value.__enter__.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer@example.com", "app-password")
        from_addr, to_addrs, body = server.sendmail.call_args.args
        assert from_addr == "no-reply@example.com"
        assert to_addrs == ["a@x.com"]
        assert RESET_SUBJECT in body

    def test_smtp_error_raises_delivery_error(self):
        with patch("app.services.notifier.smtplib.SMTP") as mock_smtp:
            server = mock_smtp.return_value.__enter__.return_value
            server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
            with pytest.raises(EmailDeliveryError):
                ResetNotifier(make_settings()).send_reset_email("a@x.com", RESET_URL)

    def test_connection_error_raises_delivery_error(self):
        with patch("app.services.notifier.smtplib.SMTP", side_effect=ConnectionRefusedError()):
            with pytest.raises(EmailDeliveryError):
                ResetNotifier(make_settings()).send_reset_email("a@x.com", RESET_URL)


class TestConsoleFallback:
    def test_unconfigured_smtp_logs_link(self, caplog):
        caplog.set_level(logging.INFO, logger="auth_service")
        with patch("app.services.notifier.smtplib.SMTP") as mock_smtp:
            ResetNotifier(make_settings(configured=False)).send_reset_email("a@x.com", RESET_URL)

        mock_smtp.assert_not_called()
        assert any("PASSWORD RESET" in record.getMessage() for record in caplog.records)
        assert any(RESET_URL in record.getMessage() for record in caplog.records)

    def test_unconfigured_smtp_outside_development_fails(self, caplog):
        """Without credentials a production deploy must not pretend the email went out."""
        caplog.set_level(logging.INFO, logger="auth_service")
        with patch("app.services.notifier.smtplib.SMTP") as mock_smtp:
            with pytest.raises(EmailDeliveryError):
                ResetNotifier(make_settings(configured=False, app_env="production")).send_reset_email(
                    "a@x.com", RESET_URL
                )

        mock_smtp.assert_not_called()
        assert not any(RESET_URL in record.getMessage() for record in caplog.records)

    def test_configured_smtp_in_production_sends(self):
        with patch("app.services.notifier.smtplib.SMTP") as mock_smtp:
            ResetNotifier(make_settings(app_env="production")).send_reset_email("a@x.com", RESET_URL)
        mock_smtp.return_value.__enter__.return_value.sendmail.assert_called_once()
