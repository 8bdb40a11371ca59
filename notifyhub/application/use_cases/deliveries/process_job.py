"""Worker-side handling of a single delivery job attempt."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.templates.rendering import render_template
from notifyhub.domain.entities import (
    DELIVERY_STATUS_PENDING,
    DeliveryJob,
    DeliveryLog,
)
from notifyhub.infrastructure.email import send_email
from notifyhub.infrastructure.repositories import (
    DeliveryLogRepository,
    TemplateRepository,
)
from notifyhub.infrastructure.sms import send_sms
from notifyhub.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], None]
SmsSender = Callable[[str, str], None]


def _resolve_content(session: Session, job: DeliveryJob) -> tuple[str | None, str]:
    """Return ``(subject, body)`` for ``job``.

    When the job references a template it is rendered with the job
    variables; a missing template, one for another channel, or a storage
    error while fetching it falls back to the literal content carried by
    the job.
    """

    if job.template_id is None:
        return job.subject, job.body

    try:
        template = TemplateRepository(session).get(job.template_id)
        if template is None:
            raise ValueError(f"Template {job.template_id} not found")
        if template.channel != job.channel:
            raise ValueError(
                f"Template {job.template_id} is a {template.channel} template"
            )
        subject = (
            render_template(template.subject, job.variables)
            if template.subject
            else job.subject
        )
        return subject, render_template(template.body, job.variables)
    except (ValueError, SQLAlchemyError):
        session.rollback()
        logger.exception(
            "Falling back to literal content for %s job %s (template %s)",
            job.channel,
            job.id,
            job.template_id,
        )
        return job.subject, job.body


def _attempt_delivery(
    session: Session,
    job: DeliveryJob,
    *,
    attempt: int,
    send: Callable[[str | None, str], None],
) -> DeliveryLog:
    repository = DeliveryLogRepository(session)
    entry = repository.create(
        DeliveryLog(
            id=None,
            notification_id=job.notification_id,
            channel=job.channel,
            recipient=job.to,
            status=DELIVERY_STATUS_PENDING,
            attempt=attempt,
            job_id=job.id,
        )
    )

    try:
        subject, body = _resolve_content(session, job)
        send(subject, body)
    except Exception as exc:
        repository.mark_failed(entry.id, error_message=str(exc) or exc.__class__.__name__)
        raise

    sent = repository.mark_sent(entry.id, sent_at=now_in_app_timezone())
    logger.info(
        "%s job %s delivered to %s on attempt %s", job.channel, job.id, job.to, attempt
    )
    return sent


def process_email_job(
    session: Session,
    job: DeliveryJob,
    *,
    attempt: int = 1,
    sender: EmailSender = send_email,
) -> DeliveryLog:
    """Deliver one email job attempt and record it in the delivery log.

    Provider errors mark the entry FAILED and propagate to the caller.
    """

    return _attempt_delivery(
        session,
        job,
        attempt=attempt,
        send=lambda subject, body: sender(subject or "", body, job.to),
    )


def process_sms_job(
    session: Session,
    job: DeliveryJob,
    *,
    attempt: int = 1,
    sender: SmsSender = send_sms,
) -> DeliveryLog:
    """Deliver one SMS job attempt and record it in the delivery log."""

    return _attempt_delivery(
        session,
        job,
        attempt=attempt,
        send=lambda _subject, body: sender(body, job.to),
    )


__all__ = ["process_email_job", "process_sms_job"]
