from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import TemplateDoesNotExist
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


@dataclass
class RenderedEmail:
    subject: str
    text_body: str
    html_body: Optional[str] = None


class EmailService:
    """Notification mail for account events (password resets)."""

    @staticmethod
    def render(template_base: str, context: Mapping[str, object]) -> RenderedEmail:
        # email/<name>.txt is required, email/<name>.html is optional
        text_body = render_to_string(f"email/{template_base}.txt", context)
        try:
            html_body = render_to_string(f"email/{template_base}.html", context)
        except TemplateDoesNotExist:
            html_body = None
        return RenderedEmail(subject=str(context.get("subject") or ""), text_body=text_body, html_body=html_body)

    @staticmethod
    def send(email: RenderedEmail, recipients: Iterable[str]) -> None:
        message = EmailMultiAlternatives(
            subject=email.subject,
            body=email.text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=list(recipients),
        )
        if email.html_body:
            message.attach_alternative(email.html_body, "text/html")
        message.send(fail_silently=False)

    @classmethod
    def send_template(cls, template_base: str, context: Mapping[str, object], recipients: Iterable[str]) -> None:
        recipients = list(recipients)
        cls.send(cls.render(template_base, context), recipients)
        logger.info(f"Sent {template_base} email to {', '.join(recipients)}")
