# Outbound transactional email over SMTP
# The Mailer is handed to routers as a dependency so tests can swap it out

import logging
import smtplib
from email.message import EmailMessage
from functools import lru_cache

from app.core.config import settings

logger = logging.getLogger("app")

class Mailer:
    """Sends plain-text email through the configured SMTP relay"""

    def __init__(self, host: str, port: int, username: str = "", password: str = "",
                 use_tls: bool = True, sender: str = ""):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    def send(self, to: str, subject: str, body: str) -> bool:
        """Send one message. Returns False when SMTP is not configured"""
        if not self.enabled:
            logger.warning(f"SMTP not configured, skipping email to {to}: {subject}")
            return False

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(message)

        logger.info(f"Sent email to {to}: {subject}")
        return True

@lru_cache()
def get_mailer() -> Mailer:
    return Mailer(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASSWORD,
        use_tls=settings.SMTP_USE_TLS,
        sender=settings.EMAIL_FROM,
    )
