from __future__ import annotations

from celery import shared_task

from .email_service import EmailService


@shared_task(bind=True, autoretry_for=(Exception,), retry_backoff=True, max_retries=5)
def send_email_task(self, template_base: str, context: dict, recipients: list[str]) -> None:
    EmailService.send_template(template_base, context, recipients)
