"""Daily credit reset: archive today's usage into creditHistory and zero the counter."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

from app.core.config import get_settings
from app.core.logging import bind_run_date, get_logger, unbind_run_date
from app.db.init import database_session
from app.models.user import Number, User

PROGRESS_EVERY = 100

log = get_logger(__name__)


@dataclass
class ResetSummary:
    date: str
    processed: int = 0
    errors: int = 0


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def cutoff_date(today: date, retention_days: int = 40) -> date:
    return today - timedelta(days=retention_days)


def roll_credit_history(
    history: dict[str, Number] | None,
    today: str,
    used: Number | None,
    cutoff: str,
) -> dict[str, Number]:
    """
    Return a new history with today's usage recorded and the cutoff entry dropped.
    Only the key equal to cutoff is removed; older keys are left alone.
    """
    rolled = dict(history or {})
    rolled[today] = used or 0
    rolled.pop(cutoff, None)
    return rolled


async def reset_user_credits(user: User, today: str, cutoff: str, daily_limit: int) -> dict[str, Any]:
    """Persist the rolled history and reset counters in a single $set. Returns the fields written."""
    fields = {
        "creditHistory": roll_credit_history(user.credit_history, today, user.credits_used_today, cutoff),
        "creditsUsedToday": 0,
        "dailyLimit": daily_limit,
        "creditsLastReset": datetime.now(timezone.utc),
    }
    await user.set(fields)
    return fields


async def _load_users() -> list[dict[str, Any]]:
    """Raw documents; each is parsed inside its own try so one bad record cannot stop the run."""
    return await User.get_pymongo_collection().find({}).to_list()


async def process_credit_reset(now: datetime | None = None) -> ResetSummary:
    """
    Run one credit reset over every user.
    Per-user failures are logged and counted; connection and fetch failures are raised.
    """
    settings = get_settings()
    run_day = (now or datetime.now()).date()
    today = format_date(run_day)
    cutoff = format_date(cutoff_date(run_day, settings.credit_history_retention_days))
    summary = ResetSummary(date=today)

    bind_run_date(today)
    log.info("credit_reset_start", cutoff=cutoff)
    try:
        async with database_session():
            documents = await _load_users()
            log.info("credit_reset_users_loaded", count=len(documents))
            for document in documents:
                try:
                    user = User.model_validate(document)
                    await reset_user_credits(user, today, cutoff, settings.default_daily_limit)
                except Exception as e:
                    summary.errors += 1
                    log.error("credit_reset_user_failed", user_id=str(document.get("_id")), error=str(e))
                    continue
                summary.processed += 1
                if summary.processed % PROGRESS_EVERY == 0:
                    log.info("credit_reset_progress", processed=summary.processed)
    except Exception as e:
        log.exception("credit_reset_fatal", error=str(e))
        raise
    finally:
        unbind_run_date()

    log.info("credit_reset_completed", errors=summary.errors, date_processed=today)
    return summary
