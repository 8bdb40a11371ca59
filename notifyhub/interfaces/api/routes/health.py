from fastapi import APIRouter

from notifyhub.infrastructure.notifications import notification_manager
from notifyhub.utils import now_in_app_timezone

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, object]:
    return {
        "status": "ok",
        "timestamp": now_in_app_timezone().isoformat(),
        "connections": notification_manager.connection_count(),
    }
