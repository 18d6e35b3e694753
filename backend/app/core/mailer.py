# app/core/mailer.py
import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Optional, Protocol, runtime_checkable

from app.core.settings import Settings, settings

log = logging.getLogger("uvicorn.error")


class RelayDispatchError(Exception):
    """The outbound mail relay refused or failed to take the message."""


@dataclass(frozen=True)
class MailMessage:
    sender: str
    recipient: str
    subject: str
    html: str


@runtime_checkable
class MailRelay(Protocol):
    def send(self, message: MailMessage) -> None: ...


class SmtpMailRelay:
    """One SMTP session per message; credentials are shared by the process."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        use_ssl: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_ssl = use_ssl

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port)
        smtp = smtplib.SMTP(self.host, self.port)
        smtp.starttls()
        return smtp

    def send(self, message: MailMessage) -> None:
        msg = MIMEText(message.html, "html", "utf-8")
        msg["Subject"] = message.subject
        msg["From"] = message.sender
        msg["To"] = message.recipient

        try:
            with self._connect() as smtp:
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise RelayDispatchError(f"SMTP delivery via {self.host}:{self.port} failed: {e}") from e


_relay: Optional[MailRelay] = None


def build_mail_relay(cfg: Settings) -> MailRelay:
    if not cfg.smtp_username or not cfg.smtp_password:
        log.warning("[mailer] SMTP_USERNAME/SMTP_PASSWORD not set; the relay will try an unauthenticated session.")
    return SmtpMailRelay(
        host=cfg.smtp_host,
        port=cfg.smtp_port,
        username=cfg.smtp_username,
        password=cfg.smtp_password,
        use_ssl=cfg.smtp_use_ssl,
    )


def get_mail_relay() -> MailRelay:
    """Process-wide relay, created on first use."""
    global _relay
    if _relay is None:
        _relay = build_mail_relay(settings)
    return _relay
