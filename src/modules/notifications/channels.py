"""Delivery channels for staff notifications.

Three independent channels: e-mail (Django mail backend), Telegram (Bot
API ``sendMessage``) and SMS (Twilio Messages REST API).  A channel
without configuration reports itself as such and is skipped; a
delivery error is raised as ``NotificationChannelFailure``.

HTTP channels retry transport errors a few times with exponential
backoff before giving up.
"""

from __future__ import annotations

import smtplib

import requests
import structlog
from django.conf import settings
from django.core.mail import send_mail
from django.utils.html import strip_tags
from requests import RequestException
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from modules.notifications.exceptions import NotificationChannelFailure
from modules.notifications.messages import OrderMessages

logger = structlog.get_logger(__name__)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


class NotificationChannel:
    name = "base"

    def is_configured(self) -> bool:
        raise NotImplementedError

    def send(self, messages: OrderMessages) -> None:
        raise NotImplementedError


class EmailChannel(NotificationChannel):
    name = "email"

    def is_configured(self) -> bool:
        return bool(settings.NOTIFICATION_EMAIL)

    def send(self, messages: OrderMessages) -> None:
        try:
            send_mail(
                subject=messages.subject,
                message=strip_tags(messages.email_html),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[settings.NOTIFICATION_EMAIL],
                html_message=messages.email_html,
            )
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationChannelFailure(self.name, str(exc)) from exc
        logger.info("notification.email_sent", to=settings.NOTIFICATION_EMAIL)


class TelegramChannel(NotificationChannel):
    name = "telegram"

    def is_configured(self) -> bool:
        return bool(settings.TELEGRAM_BOT_TOKEN and settings.TELEGRAM_CHAT_ID)

    @http_retry()
    def _post(self, text: str) -> requests.Response:
        url = f"{settings.TELEGRAM_API_URL.rstrip('/')}/bot{settings.TELEGRAM_BOT_TOKEN}/sendMessage"
        resp = requests.post(
            url,
            json={"chat_id": settings.TELEGRAM_CHAT_ID, "text": text, "parse_mode": "HTML"},
            timeout=settings.NOTIFICATION_HTTP_TIMEOUT,
        )
        resp.raise_for_status()
        return resp

    def send(self, messages: OrderMessages) -> None:
        try:
            self._post(messages.telegram_text)
        except RequestException as exc:
            raise NotificationChannelFailure(self.name, str(exc)) from exc
        logger.info("notification.telegram_sent", chat_id=settings.TELEGRAM_CHAT_ID)


class SmsChannel(NotificationChannel):
    name = "sms"

    def is_configured(self) -> bool:
        return bool(
            settings.TWILIO_ACCOUNT_SID
            and settings.TWILIO_AUTH_TOKEN
            and settings.TWILIO_PHONE_NUMBER
            and settings.NOTIFICATION_PHONE
        )

    @http_retry()
    def _post(self, body: str) -> requests.Response:
        sid = settings.TWILIO_ACCOUNT_SID
        url = f"{settings.TWILIO_API_URL.rstrip('/')}/Accounts/{sid}/Messages.json"
        resp = requests.post(
            url,
            data={
                "To": settings.NOTIFICATION_PHONE,
                "From": settings.TWILIO_PHONE_NUMBER,
                "Body": body,
            },
            auth=(sid, settings.TWILIO_AUTH_TOKEN),
            timeout=settings.NOTIFICATION_HTTP_TIMEOUT,
        )
        resp.raise_for_status()
        return resp

    def send(self, messages: OrderMessages) -> None:
        try:
            self._post(messages.sms_text)
        except RequestException as exc:
            raise NotificationChannelFailure(self.name, str(exc)) from exc
        logger.info("notification.sms_sent", to=settings.NOTIFICATION_PHONE)


CHANNELS: dict[str, NotificationChannel] = {
    channel.name: channel for channel in (EmailChannel(), TelegramChannel(), SmsChannel())
}
