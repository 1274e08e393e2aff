"""Process entrypoint. Usage: python -m app.serve

In development (ENV=development) the credit reset runs once and the process exits
with its status; otherwise the HTTP trigger is served.
"""

import sys

import uvicorn

from app.core.config import get_settings
from app.core.logging import configure_logging, get_logger
from app.worker import reset_credits

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(debug=settings.debug)
    if settings.is_development:
        log.info("startup", msg="Development mode: running credit reset directly")
        sys.exit(reset_credits.run())
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
