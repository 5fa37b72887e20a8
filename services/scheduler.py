import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from services.ai_service import run_auto_insight

logger = logging.getLogger(__name__)


class InsightScheduler:
    """Runs the AI auto-insight scan on a fixed interval."""

    def __init__(self, realtime, documents, completion, minutes: int):
        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self.realtime = realtime
        self.documents = documents
        self.completion = completion
        self.minutes = minutes

    def start(self):
        self.scheduler.add_job(
            self.auto_insight_job,
            IntervalTrigger(minutes=self.minutes),
            id="ai_auto_insight",
            name="Generate AI risk / growth alert",
            replace_existing=True,
            max_instances=1,
        )
        self.scheduler.start()
        logger.info(f"Auto-insight job scheduled every {self.minutes} minute(s)")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown()

    async def auto_insight_job(self):
        try:
            alert = await run_auto_insight(self.realtime, self.documents, self.completion)
            logger.info(f"Scheduled auto-insight stored alert {alert.get('id')}")
        except Exception as e:
            # Next tick retries on its own schedule
            logger.exception(f"Scheduled auto-insight failed: {e}")
