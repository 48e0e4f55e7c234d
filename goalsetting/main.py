"""Main entry point for the goal reminder engine."""

import asyncio
import logging
import signal
import sys
from datetime import timedelta

from goalsetting.config import Config
from goalsetting.db.migrations import run_migrations
from goalsetting.db.repository import Repository
from goalsetting.engine.contact_cache import ContactCache
from goalsetting.engine.ports import Notifier
from goalsetting.engine.recurring_reset import RecurringResetter
from goalsetting.engine.reminder_dispatch import ReminderDispatcher
from goalsetting.engine.runner import ReminderEngine
from goalsetting.notify.email_notifier import EmailNotifier, SmtpSettings
from goalsetting.notify.log_notifier import LogNotifier
from goalsetting.utils.error_handler import error_handler

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)


def build_notifier() -> Notifier:
    """Create the notifier selected by NOTIFIER_BACKEND."""
    if Config.NOTIFIER_BACKEND == "log":
        return LogNotifier(app_url=Config.APP_URL, timezone=Config.TIMEZONE)

    settings = SmtpSettings(
        host=Config.SMTP_HOST,
        port=Config.SMTP_PORT,
        user=Config.SMTP_USER,
        password=Config.SMTP_PASS,
        from_email=Config.FROM_EMAIL,
        from_name=Config.FROM_NAME,
        timeout=Config.EXTERNAL_CALL_TIMEOUT,
    )
    return EmailNotifier(settings, app_url=Config.APP_URL, timezone=Config.TIMEZONE)


def build_engine(repo: Repository, notifier: Notifier) -> ReminderEngine:
    """Wire both loops to the repository and notifier."""
    cache = ContactCache(ttl=timedelta(seconds=Config.CONTACT_CACHE_TTL))

    dispatcher = ReminderDispatcher(
        repo,
        repo,
        notifier,
        cache,
        morning_time=Config.MORNING_TIME,
        evening_time=Config.EVENING_TIME,
        timezone=Config.TIMEZONE,
        interval=Config.REMINDER_CHECK_INTERVAL,
        call_timeout=Config.EXTERNAL_CALL_TIMEOUT,
    )
    resetter = RecurringResetter(
        repo,
        timezone=Config.TIMEZONE,
        interval=Config.RECURRING_CHECK_INTERVAL,
        call_timeout=Config.EXTERNAL_CALL_TIMEOUT,
    )
    return ReminderEngine(dispatcher, resetter)


async def run() -> None:
    """Run the engine until SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    loop.set_exception_handler(error_handler)

    # Initialize database
    await run_migrations(Config.DATABASE_PATH)

    repo = Repository(Config.DATABASE_PATH)
    await repo.connect()

    engine = build_engine(repo, build_notifier())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, engine.stop_event.set)
        except NotImplementedError:
            # Windows event loops lack signal handlers; Ctrl+C still cancels run()
            pass

    try:
        engine.start()
        logger.info("Goal reminder engine initialized successfully")
        await engine.wait()
    finally:
        await engine.stop()
        await repo.close()
        logger.info("Goal reminder engine shut down")


def main() -> None:
    """Start the engine."""
    # Validate configuration
    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logger.info("Starting goal reminder engine...")
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
