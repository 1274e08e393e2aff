from datetime import datetime, timezone

from fastapi import APIRouter, Header, Request
from fastapi.responses import ORJSONResponse

from app.core.exceptions import MethodNotAllowedError
from app.core.logging import get_logger
from app.core.security import CRON_TOKEN_HEADER, verify_cron_token
from app.services.credit_reset import process_credit_reset

router = APIRouter()
log = get_logger(__name__)

# Registered for every method so non-POST calls get the JSON 405 body below.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.api_route("/reset-tokens", methods=ALL_METHODS)
async def reset_tokens(
    request: Request,
    x_auth_token: str | None = Header(default=None, alias=CRON_TOKEN_HEADER),
):
    """Archive and reset every user's daily credits. Called by the external scheduler."""
    if request.method != "POST":
        raise MethodNotAllowedError()
    verify_cron_token(x_auth_token)

    try:
        await process_credit_reset()
    except Exception as e:
        log.error("cron_job_failed", job="reset_tokens", error=str(e))
        return ORJSONResponse(
            status_code=500,
            content={"success": False, "error": "Credit reset failed", "message": str(e)},
        )
    return {
        "success": True,
        "message": "Credit reset completed successfully",
        "timestamp": _iso_now(),
    }
