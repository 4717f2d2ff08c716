"""
Asset stream reader - lazy, forward-only access to the asset repository.
"""

import logging
from typing import AsyncIterator, NamedTuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from media_export.models.asset import Asset

logger = logging.getLogger(__name__)


class AssetStream(NamedTuple):
    """Best-effort total plus the lazy record sequence."""

    total: int
    records: AsyncIterator[Asset]


class AssetStreamReader:
    """
    Pages through all assets by primary key.

    Keyset pagination keeps each query cheap regardless of collection size,
    and the session's identity map is cleared between pages so memory is
    bounded by ``batch_size``.
    """

    def __init__(self, db: AsyncSession, batch_size: int = 100):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.db = db
        self.batch_size = batch_size

    async def count(self) -> int:
        """
        Count all assets.

        Only used to size the progress bar; may be stale if the repository
        changes during the run.
        """
        result = await self.db.execute(select(func.count(Asset.id)))
        return result.scalar() or 0

    async def iterate(self) -> AsyncIterator[Asset]:
        """Yield every asset exactly once, ordered by identifier."""
        last_id: str | None = None

        while True:
            query = (
                select(Asset)
                .options(
                    selectinload(Asset.resource),
                    selectinload(Asset.tags),
                    selectinload(Asset.asset_collections),
                )
                .order_by(Asset.id)
                .limit(self.batch_size)
            )
            if last_id is not None:
                query = query.where(Asset.id > last_id)

            result = await self.db.execute(query)
            page = result.scalars().all()
            if not page:
                return

            logger.debug(f"Fetched page of {len(page)} assets after {last_id!r}")
            for asset in page:
                yield asset

            last_id = page[-1].id
            if len(page) < self.batch_size:
                return
            self.db.expunge_all()

    async def open(self) -> AssetStream:
        """Return the total count together with the lazy record sequence."""
        total = await self.count()
        return AssetStream(total=total, records=self.iterate())
