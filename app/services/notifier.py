"""Password reset email delivery over SMTP."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import Settings, get_settings
from app.exceptions import EmailDeliveryError

logger = logging.getLogger("auth_service")

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "emails"
RESET_SUBJECT = "Password Reset Request"

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)


class ResetNotifier:
    """Sends reset links to a user's registered email address."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def render(self, reset_url: str) -> str:
        template = _env.get_template("password_reset.html")
        return template.render(
            reset_url=reset_url,
            expire_minutes=self.settings.RESET_TOKEN_EXPIRE_MINUTES,
        )

    def build_message(self, to_email: str, reset_url: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = RESET_SUBJECT
        message["From"] = self.settings.MAIL_FROM or self.settings.SMTP_USER
        message["To"] = to_email
        message.attach(MIMEText(self.render(reset_url), "html"))
        return message

    def send_reset_email(self, to_email: str, reset_url: str) -> None:
        """Send the reset link. Raises EmailDeliveryError if the transport fails.

        Without SMTP credentials the link is logged instead, but only when
        APP_ENV is development; elsewhere that is a delivery failure.
        """
        if not self.settings.smtp_configured:
            if not self.settings.is_development:
                logger.error("SMTP not configured, reset email to %s not sent", to_email)
                raise EmailDeliveryError()
            logger.warning("SMTP not configured, reset email to %s not sent", to_email)
            logger.info("PASSWORD RESET: %s", reset_url)
            return

        message = self.build_message(to_email, reset_url)
        try:
            with smtplib.SMTP(
                self.settings.SMTP_HOST,
                self.settings.SMTP_PORT,
                timeout=self.settings.SMTP_TIMEOUT_SECONDS,
            ) as server:
                server.starttls()
                server.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
                server.sendmail(message["From"], [to_email], message.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send reset email to %s: %s", to_email, exc)
            raise EmailDeliveryError() from exc

        logger.info("Reset email sent to %s", to_email)


_reset_notifier: ResetNotifier | None = None


def get_reset_notifier() -> ResetNotifier:
    """Get singleton reset notifier instance."""
    global _reset_notifier
    if _reset_notifier is None:
        _reset_notifier = ResetNotifier()
    return _reset_notifier
