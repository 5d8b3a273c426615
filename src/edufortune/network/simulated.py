"""Simulated server sync and course download."""

import asyncio

import structlog

from edufortune.content.catalog import ContentCatalog
from edufortune.errors import NetworkError
from edufortune.models.course import Course

logger = structlog.get_logger()


class SimulatedNetwork:
    """Stands in for a backend server: every call is a fixed delay.

    Operations run under `asyncio.wait_for` with an explicit timeout. A
    download only touches the catalog after its delay has fully elapsed, so a
    cancelled or timed-out download leaves state unchanged.

    Args:
        catalog: Catalog whose overlay is updated by downloads.
        sync_latency: Simulated sync delay in seconds.
        download_latency: Simulated download delay in seconds.
        timeout: Upper bound for any single operation in seconds.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        sync_latency: float = 2.0,
        download_latency: float = 3.0,
        timeout: float = 10.0,
    ):
        self.catalog = catalog
        self.sync_latency = sync_latency
        self.download_latency = download_latency
        self.timeout = timeout
        self._in_flight = 0

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    async def _delay(self, operation: str, seconds: float) -> None:
        self._in_flight += 1
        try:
            await asyncio.wait_for(asyncio.sleep(seconds), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning("network_timeout", operation=operation, timeout=self.timeout)
            raise NetworkError(f"{operation} timed out after {self.timeout}s") from e
        except asyncio.CancelledError:
            logger.info("network_cancelled", operation=operation)
            raise
        finally:
            self._in_flight -= 1

    async def sync_with_server(self) -> None:
        await self._delay("sync", self.sync_latency)
        logger.info("sync_completed")

    async def download_course(self, course_id: str) -> Course:
        """Download a course, then unlock it.

        Raises:
            UnknownCourseError: No such course in the catalog.
            NetworkError: The download timed out.
        """
        self.catalog.require_course(course_id)
        await self._delay("download", self.download_latency)
        course = self.catalog.unlock_course(course_id)
        logger.info("course_downloaded", course_id=course_id)
        return course
