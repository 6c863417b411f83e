"""PostgreSQL implementation of IIdentifierRepository."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from serverconf.domain.value_objects import XRoadId
from serverconf.infrastructure.models import NATURAL_KEY_COLUMNS, IdentifierModel
from serverconf.infrastructure.observability import (
    DefaultIdentifierRepositoryProbe,
    IdentifierRepositoryProbe,
)
from serverconf.ports.repositories import IIdentifierRepository


class IdentifierRepository(IIdentifierRepository):
    """Get-or-persist store for X-Road identities.

    Inserts use ``ON CONFLICT DO NOTHING`` on the natural key, so concurrent
    or repeated calls with overlapping identities never create duplicates.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: IdentifierRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultIdentifierRepositoryProbe()

    async def get_or_persist(self, xroad_ids: Collection[XRoadId]) -> set[XRoadId]:
        unique_ids = set(xroad_ids)
        if not unique_ids:
            return set()

        stmt = (
            insert(IdentifierModel)
            .values([IdentifierModel.natural_key(i) for i in unique_ids])
            .on_conflict_do_nothing(index_elements=list(NATURAL_KEY_COLUMNS))
        )
        result = await self._session.execute(stmt)

        rows = await self._session.execute(
            select(IdentifierModel).where(IdentifierModel.natural_key_in(unique_ids))
        )
        persisted = {model.to_domain() for model in rows.scalars().all()}

        self._probe.identifiers_persisted(
            requested=len(unique_ids), created=max(result.rowcount, 0)
        )
        return persisted
