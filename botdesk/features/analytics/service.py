"""Analytics service for reading and recording snapshots."""

from fastapi import Depends

from botdesk.core.schema import AnalyticsCreate, AnalyticsSnapshot
from botdesk.core.storage import StorageProvider, get_storage


class AnalyticsService:
    """Service for analytics operations."""

    def __init__(self, storage: StorageProvider):
        self.storage = storage

    async def get_latest(self) -> AnalyticsSnapshot | None:
        """Most recent snapshot, or None when nothing was recorded yet."""
        snapshots = await self.storage.get_analytics()
        return snapshots[0] if snapshots else None

    async def get_history(self, limit: int = 30) -> list[AnalyticsSnapshot]:
        """Snapshots, most recent first."""
        snapshots = await self.storage.get_analytics()
        return snapshots[:limit]

    async def record_snapshot(self, data: AnalyticsCreate) -> AnalyticsSnapshot:
        """Append a snapshot. Missing counters are stored as zero."""
        return await self.storage.create_analytics_entry(data)


def get_analytics_service(
    storage: StorageProvider = Depends(get_storage),
) -> AnalyticsService:
    """Get analytics service instance."""
    return AnalyticsService(storage=storage)
