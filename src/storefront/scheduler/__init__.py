"""Timer schedulers for client-side services."""

from storefront.scheduler.asyncio_scheduler import AsyncioScheduler
from storefront.scheduler.fake_scheduler import ManualScheduler
from storefront.scheduler.port import Scheduler, TimerHandle

__all__ = ["AsyncioScheduler", "ManualScheduler", "Scheduler", "TimerHandle"]
