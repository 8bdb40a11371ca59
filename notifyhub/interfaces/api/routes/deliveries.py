"""Administrative view over dead-lettered delivery jobs."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from redis import RedisError

from notifyhub.application.use_cases.deliveries import list_failed_jobs as list_failed_jobs_uc
from notifyhub.domain.entities import Recipient
from notifyhub.interfaces.api.dependencies import require_admin
from notifyhub.interfaces.api.routes_helpers import http_error_from
from notifyhub.interfaces.api.schemas import FailedJobRead

router = APIRouter(prefix="/deliveries", tags=["deliveries"])


@router.get("/failed", response_model=list[FailedJobRead])
def list_failed_jobs(
    channel: str = Query(..., description="EMAIL or SMS"),
    _: Recipient = Depends(require_admin),
) -> list[FailedJobRead]:
    """Return the most recent jobs that exhausted their delivery attempts."""

    try:
        records = list_failed_jobs_uc(channel=channel)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    except RedisError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Job record store unavailable",
        ) from exc
    return [FailedJobRead.model_validate(record) for record in records]
