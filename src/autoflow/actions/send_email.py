"""Templated email action and its SMTP transport."""
import smtplib
from collections.abc import Mapping
from email.message import EmailMessage
from typing import Any, Protocol

from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.actions.template import render, template_namespace
from autoflow.config import Settings, get_settings
from autoflow.observability import get_logger

logger = get_logger(__name__)


class EmailTransport(Protocol):
    """Protocol for email transports."""

    def send(self, to: str, subject: str, html: str) -> None:
        """Deliver one HTML message."""
        ...


class SmtpTransport:
    """
    SMTP transport.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS when the
    server offers it. Logs in only when a username is configured.
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        """Build the MIME message."""
        message = EmailMessage()
        message["From"] = self._settings.smtp_from
        message["To"] = to
        message["Subject"] = subject
        message.set_content(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        """Deliver one HTML message."""
        settings = self._settings
        message = self.build_message(to, subject, html)
        timeout = settings.http_timeout_s

        if settings.smtp_port == 465:
            client = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, timeout=timeout)
        else:
            client = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=timeout)

        with client:
            if settings.smtp_port != 465:
                client.ehlo()
                if client.has_extn("starttls"):
                    client.starttls()
                    client.ehlo()
            if settings.smtp_user:
                password = settings.smtp_password.get_secret_value() if settings.smtp_password else ""
                client.login(settings.smtp_user, password)
            client.send_message(message)


class SendEmailAction(Action):
    """
    Send Email - resolves placeholders in ``to``, ``subject`` and ``body`` and
    hands the message to the transport. The ``provider`` parameter is accepted
    for the editor; every provider goes through the configured transport.
    """

    def __init__(self, transport: EmailTransport | None = None):
        self._transport = transport
        super().__init__()

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="send_email", side_effect=SideEffect.NETWORK)

    @property
    def transport(self) -> EmailTransport:
        if self._transport is None:
            self._transport = SmtpTransport()
        return self._transport

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        namespace = template_namespace(context)
        to = render(config.get("to", ""), namespace)
        subject = render(config.get("subject", ""), namespace)
        body = render(config.get("body", ""), namespace)

        self.transport.send(to, subject, body)
        logger.info("Email sent", extra={"to": to, "user_id": user_id})

        return {"to": to, "subject": subject, "body": body}
