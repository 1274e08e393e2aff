import hmac

from app.core.config import get_settings
from app.core.exceptions import UnauthorizedError

CRON_TOKEN_HEADER = "x-auth-token"


def verify_cron_token(token: str | None) -> None:
    """Raise UnauthorizedError unless token matches CRON_SECRET_TOKEN."""
    expected = get_settings().cron_secret_token
    if not token or not expected:
        raise UnauthorizedError()
    if not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise UnauthorizedError()
