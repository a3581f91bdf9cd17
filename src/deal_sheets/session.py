"""
Cancellable, latest-wins loading for interactive callers.

Each ``load()`` supersedes the one before it. The two network round trips
run in worker threads, so a cancel between them stops the fetch from being
issued; a result that arrives for a superseded load is discarded and never
replaces ``deals``.
"""

import asyncio
import logging
from typing import Optional

from deal_sheets.config import LoadSettings
from deal_sheets.connectors.base import BaseConnector
from deal_sheets.connectors.google_sheets import GoogleSheetsConnector
from deal_sheets.errors import DealSheetsError, LoadSuperseded, NoDeals
from deal_sheets.models.deal import Deal
from deal_sheets.pipeline import deals_from_table, resolve_source

logger = logging.getLogger(__name__)


class LoadSession:
    """Holds the deals from the most recent successful load."""

    def __init__(self, connector: Optional[BaseConnector] = None, *, allow_empty: bool = False):
        self._connector = connector or GoogleSheetsConnector()
        self._allow_empty = allow_empty
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._superseded: set[int] = set()
        self.deals: list[Deal] = []
        self.error: Optional[DealSheetsError] = None
        self.settings: Optional[LoadSettings] = None

    @classmethod
    def from_settings(
        cls,
        settings: LoadSettings,
        connector: Optional[BaseConnector] = None,
        *,
        allow_empty: bool = False,
    ) -> "LoadSession":
        """Session bound to configured settings; see start()."""
        session = cls(
            connector or GoogleSheetsConnector(base_url=settings.base_url, timeout=settings.timeout),
            allow_empty=allow_empty,
        )
        session.settings = settings
        return session

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Abandon the in-flight load, if any."""
        if self._task is not None and not self._task.done():
            self._superseded.add(self._generation)
            self._task.cancel()

    async def _run(self, source: str, credential: str, range_selector: Optional[str]) -> list[Deal]:
        spreadsheet_id = resolve_source(source, credential)
        check = await asyncio.to_thread(self._connector.validate, spreadsheet_id, credential)
        check.raise_for_error()
        table = await asyncio.to_thread(
            self._connector.fetch_table, spreadsheet_id, credential, range_selector
        )
        deals = deals_from_table(self._connector, table, spreadsheet_id)
        if not deals and not self._allow_empty:
            raise NoDeals(context={"spreadsheet_id": spreadsheet_id})
        return deals

    async def load(
        self, source: str, credential: str, range_selector: Optional[str] = None
    ) -> list[Deal]:
        """
        Start a load, superseding any in-flight one.
        Raises LoadSuperseded if a newer load (or cancel) overtakes this one.
        """
        self.cancel()
        self._generation += 1
        generation = self._generation
        task = asyncio.create_task(self._run(source, credential, range_selector))
        self._task = task

        try:
            deals = await task
        except asyncio.CancelledError:
            if generation in self._superseded:
                self._superseded.discard(generation)
                raise LoadSuperseded(context={"generation": generation}) from None
            raise
        except DealSheetsError as e:
            if generation != self._generation:
                raise LoadSuperseded(context={"generation": generation}) from e
            self.error = e
            raise

        if generation != self._generation:
            logger.debug("Discarding stale result from load %d", generation)
            raise LoadSuperseded(context={"generation": generation})

        self.deals = deals
        self.error = None
        return deals

    async def start(self) -> Optional[list[Deal]]:
        """
        Load from the bound settings when they ask for auto_load.
        Returns None without any request when auto_load is off.
        """
        settings = self.settings
        if settings is None or not settings.auto_load:
            logger.debug("Auto-load disabled; waiting for an explicit load")
            return None
        return await self.load(settings.spreadsheet or "", settings.api_key or "", settings.range)
