"""
Email service for authentication.

Sends account verification emails through SendGrid's HTTP API or SMTP.
With neither configured, messages are only logged.
"""

from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import httpx

from userauth.config import AuthConfig
from userauth.errors import NotificationError

logger = logging.getLogger(__name__)

APP_NAME = "userauth"
SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"
VERIFICATION_SUBJECT = "Please verify your account"


def render_verification_email(verify_url: str) -> tuple[str, str]:
    """Return (html, text) bodies for a verification email."""
    html_body = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .button {{
                display: inline-block;
                padding: 12px 24px;
                background-color: #3B82F6;
                color: white !important;
                text-decoration: none;
                border-radius: 6px;
                margin: 20px 0;
            }}
            .footer {{ color: #666; font-size: 12px; margin-top: 30px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h2>Welcome to {APP_NAME}!</h2>
            <p>Please verify your email address to activate your account.</p>
            <a href="{verify_url}" class="button">Click this link to verify your account</a>
            <p>Or copy this link into your browser:</p>
            <p style="word-break: break-all; color: #666;">{verify_url}</p>
            <div class="footer">
                <p>If you didn't create an account, you can safely ignore this email.</p>
            </div>
        </div>
    </body>
    </html>
    """

    text_body = f"""
    Welcome to {APP_NAME}!

    Please verify your email address by opening the link below:

    {verify_url}

    If you didn't create an account, you can safely ignore this email.
    """
    return html_body, text_body


class EmailSender:
    """Base sender; subclasses implement :meth:`send_email`."""

    def __init__(self, from_address: str):
        self.from_address = from_address

    def send_email(
        self, to: str, subject: str, html_body: str, text_body: Optional[str] = None
    ) -> bool:
        raise NotImplementedError

    def send_verification(self, email: str, verify_url: str) -> bool:
        """
        Send the account verification link.

        Returns True if the provider accepted the message.
        Raises NotificationError if the provider failed.
        """
        html_body, text_body = render_verification_email(verify_url)
        return self.send_email(email, VERIFICATION_SUBJECT, html_body, text_body)


class SendGridEmailSender(EmailSender):
    """SendGrid v3 mail/send over httpx."""

    def __init__(
        self,
        api_key: str,
        from_address: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        super().__init__(from_address)
        self._api_key = api_key
        self._client = client
        self.timeout = timeout

    def _payload(self, to: str, subject: str, html_body: str, text_body: Optional[str]) -> dict:
        content = []
        if text_body:
            content.append({"type": "text/plain", "value": text_body})
        content.append({"type": "text/html", "value": html_body})
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_address},
            "subject": subject,
            "content": content,
        }

    def send_email(
        self, to: str, subject: str, html_body: str, text_body: Optional[str] = None
    ) -> bool:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        payload = self._payload(to, subject, html_body, text_body)
        try:
            if self._client is not None:
                response = self._client.post(SENDGRID_SEND_URL, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.post(SENDGRID_SEND_URL, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"SendGrid rejected email to {to}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise NotificationError(f"SendGrid request failed for {to}: {e}") from e

        logger.info(f"Email sent to {to}: {subject}")
        return True


class SmtpEmailSender(EmailSender):
    """Plain SMTP delivery with optional STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        from_address: str,
        use_tls: bool = True,
    ):
        super().__init__(from_address)
        self.host = host
        self.port = port
        self.user = user
        self._password = password
        self.use_tls = use_tls

    def send_email(
        self, to: str, subject: str, html_body: str, text_body: Optional[str] = None
    ) -> bool:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{APP_NAME} <{self.from_address}>"
        msg["To"] = to

        # Add plain text version
        if text_body:
            msg.attach(MIMEText(text_body, "plain"))

        # Add HTML version
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.user, self._password)
                server.sendmail(self.from_address, to, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP delivery to {to} failed: {e}") from e

        logger.info(f"Email sent to {to}: {subject}")
        return True


class LoggingEmailSender(EmailSender):
    """Used when no provider is configured; nothing leaves the process."""

    def send_email(
        self, to: str, subject: str, html_body: str, text_body: Optional[str] = None
    ) -> bool:
        logger.warning("Email not configured - skipping send")
        logger.info(f"Would send email to {to}: {subject}")
        return False

    def send_verification(self, email: str, verify_url: str) -> bool:
        logger.info(f"Verification link for {email}: {verify_url}")
        return super().send_verification(email, verify_url)


def build_email_sender(config: AuthConfig) -> EmailSender:
    """Pick SendGrid, then SMTP, then the logging fallback."""
    if config.sendgrid_configured:
        return SendGridEmailSender(config.sendgrid_api_key, config.email_from)
    if config.smtp_configured:
        return SmtpEmailSender(
            host=config.smtp_host,
            port=config.smtp_port,
            user=config.smtp_user,
            password=config.smtp_password,
            from_address=config.email_from,
            use_tls=config.smtp_use_tls,
        )
    return LoggingEmailSender(config.email_from)
