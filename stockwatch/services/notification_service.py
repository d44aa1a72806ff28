"""Email notifications for products at critical stock."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional, Sequence

from stockwatch.core.config import Settings
from stockwatch.core.exceptions import DispatchError, NotifierNotConfiguredError
from stockwatch.core.templates import email_templates
from stockwatch.schemas.inventory import ProductSnapshot, SupplierRecord

logger = logging.getLogger(__name__)

DEFAULT_SENDER_NAME = "Stock Alerts"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    body_text: str
    body_html: str


class SmtpEmailTransport:
    """Blocking SMTP sender. One instance lives for the whole process."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def send(self, message: EmailMessage) -> None:
        settings = self._settings
        host = settings.SMTP_HOST
        port = settings.SMTP_PORT or (465 if settings.SMTP_USE_SSL else 587)
        timeout = settings.SMTP_TIMEOUT

        if settings.SMTP_USE_SSL:
            smtp = smtplib.SMTP_SSL(host=host, port=port, timeout=timeout)
        else:
            smtp = smtplib.SMTP(host=host, port=port, timeout=timeout)
        try:
            if settings.SMTP_USE_TLS and not settings.SMTP_USE_SSL:
                smtp.starttls()

            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
            smtp.send_message(message)
        finally:
            try:
                smtp.quit()
            except smtplib.SMTPException:
                smtp.close()


class EmailNotificationService:
    """Renders and sends critical stock alerts to suppliers.

    The transport is anything with a blocking ``send(EmailMessage)``; when
    none is given an SMTP transport is built from the settings, provided the
    SMTP credentials are present.
    """

    def __init__(self, settings: Settings, transport=None):
        self._settings = settings
        if transport is None and settings.smtp_configured:
            transport = SmtpEmailTransport(settings)
        self._transport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def is_configured(self) -> bool:
        return self._transport is not None

    def ensure_configured(self) -> None:
        if not self.is_configured:
            raise NotifierNotConfiguredError("Email transport is not configured")

    def render_critical_stock_email(
        self,
        supplier: SupplierRecord,
        products: Sequence[ProductSnapshot],
    ) -> RenderedEmail:
        if len(products) == 1:
            # Header values must stay on one line
            subject = "ALERT: Critical stock - " + " ".join(products[0].name.split())
        else:
            subject = f"ALERT: {len(products)} products at critical stock"

        context = {
            "supplier": supplier,
            "products": list(products),
            "app_url": self._settings.APP_URL,
            "sender_name": self._sender_name,
        }
        return RenderedEmail(
            subject=subject,
            body_text=email_templates.get_template("emails/critical_stock.txt").render(**context),
            body_html=email_templates.get_template("emails/critical_stock.html").render(**context),
        )

    async def dispatch(self, supplier: SupplierRecord, products: Sequence[ProductSnapshot]) -> str:
        """Send one email to ``supplier`` listing every product given.

        Returns the recipient address. Raises ``DispatchError`` when the
        message cannot be built, or when the transport fails or does not
        answer within ``DISPATCH_TIMEOUT``.
        """
        self.ensure_configured()
        if not products:
            raise ValueError("dispatch needs at least one product")
        if not supplier.email:
            raise DispatchError(supplier.name or supplier.id, "supplier has no email address")

        try:
            rendered = self.render_critical_stock_email(supplier, products)
            message = self._build_message(rendered.subject, supplier.email, rendered.body_text, rendered.body_html)
        except Exception as exc:
            logger.error("Could not build critical stock alert for %s: %s", supplier.email, exc, exc_info=True)
            raise DispatchError(supplier.email, str(exc)) from exc
        await self._send(message)
        logger.info(
            "Critical stock alert sent to %s (%d product(s): %s)",
            supplier.email, len(products), ", ".join(p.id for p in products),
        )
        return supplier.email

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _build_message(
        self,
        subject: str,
        to_address: str,
        body_text: str,
        body_html: Optional[str] = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self._formatted_from_address
        message["To"] = to_address
        message.set_content(body_text)
        if body_html:
            message.add_alternative(body_html, subtype="html")
        return message

    @property
    def _sender_name(self) -> str:
        return self._settings.SMTP_FROM_NAME or DEFAULT_SENDER_NAME

    @property
    def _formatted_from_address(self) -> str:
        from_email = self._settings.SMTP_FROM_EMAIL or self._settings.SMTP_USERNAME
        return formataddr((self._sender_name, from_email))

    async def _send(self, message: EmailMessage) -> None:
        recipient = message["To"]
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._transport.send, message),
                timeout=self._settings.DISPATCH_TIMEOUT,
            )
        except asyncio.TimeoutError:
            logger.error("Timed out sending critical stock alert to %s", recipient)
            raise DispatchError(recipient, f"timed out after {self._settings.DISPATCH_TIMEOUT:g}s")
        except Exception as exc:
            logger.error("Failed to send critical stock alert to %s: %s", recipient, exc, exc_info=True)
            raise DispatchError(recipient, str(exc)) from exc
