"""Run the credit reset once, without HTTP. Usage: python -m app.worker.reset_credits"""

import asyncio
import sys

from app.core.config import get_settings
from app.core.logging import configure_logging, get_logger
from app.services.credit_reset import process_credit_reset

log = get_logger(__name__)


def run() -> int:
    """Return the process exit code: 0 on success, 1 on failure."""
    try:
        summary = asyncio.run(process_credit_reset())
    except Exception as e:
        log.error("local_run_failed", error=str(e))
        return 1
    log.info("local_run_completed", date=summary.date, errors=summary.errors)
    return 0


def main() -> None:
    configure_logging(debug=get_settings().debug)
    sys.exit(run())


if __name__ == "__main__":
    main()
