#!/usr/bin/env python3
"""
Reminder scheduler worker - runs the due-check loop in this process until SIGINT/SIGTERM.
"""
import logging
import signal

from prometheus_client import start_http_server

from checkbill.core.config import settings as app_settings
from checkbill.db.session import init_db
from .config import settings
from .tasks import build_scheduler

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=app_settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    init_db()

    if settings.METRICS_ENABLED:
        start_http_server(settings.METRICS_PORT)
        logger.info(f"📈 [Worker] Metrics exposed on :{settings.METRICS_PORT}")

    scheduler = build_scheduler()

    def _shutdown(signum, _frame):
        logger.info(f"🛑 [Worker] Signal {signum} received, stopping scheduler")
        scheduler.stop()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    scheduler.run_forever()


if __name__ == "__main__":
    main()
