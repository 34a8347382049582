import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from src.app.services.notifier import INotifier

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class LoggingNotifier(INotifier):
    """Dev-mode notifier: logs instead of sending"""

    async def send(self, destination: str, message: str) -> None:
        logger.info(f"Notification for {redact_email(destination)}: {message}")


class SmtpNotifier(INotifier):
    """
    Email notifier over SMTP.

    smtplib is blocking, so each send runs in a worker thread.
    """

    subject = "New sign-in to your account"

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        from_email: str = "",
        use_tls: bool = True,
        timeout: float = 30,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username
        self.use_tls = use_tls
        self.timeout = timeout

    async def send(self, destination: str, message: str) -> None:
        await asyncio.to_thread(self._send, destination, message)

    def _send(self, destination: str, message: str) -> None:
        msg = EmailMessage()
        msg["Subject"] = self.subject
        msg["From"] = self.from_email
        msg["To"] = destination
        msg.set_content(message)

        context = ssl.create_default_context()
        if self.use_tls:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls(context=context)
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP_SSL(
                self.host, self.port, context=context, timeout=self.timeout
            ) as server:
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)

        logger.info(f"Notification email sent to {redact_email(destination)}")
