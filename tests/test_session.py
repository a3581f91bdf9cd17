"""Tests for LoadSession cancellation and latest-wins semantics."""

import asyncio
import threading
from typing import Optional

import pytest

from deal_sheets.connectors.base import BaseConnector, ConnectionCheck
from deal_sheets.config import LoadSettings
from deal_sheets.errors import AccessDenied, LoadSuperseded, NoDeals
from deal_sheets.models.raw import RawTable
from deal_sheets.session import LoadSession

SHEET_ID = "1AbC-dEf_123"
API_KEY = "test-api-key"

HEADERS = ["deal_id", "deal_name", "deal_value"]


class GatedConnector(BaseConnector):
    """In-memory connector whose calls can be held open per range."""

    source_id = "test"
    default_range = "Old"

    def __init__(self, tables: dict[str, RawTable], check: Optional[ConnectionCheck] = None):
        self.tables = tables
        self.check = check or ConnectionCheck.ok()
        self.validate_gate: Optional[threading.Event] = None
        self.fetch_gates: dict[str, threading.Event] = {}
        self.started = threading.Event()
        self.fetched: list[str] = []

    def validate(self, spreadsheet_id, credential):
        if self.validate_gate is not None:
            self.started.set()
            self.validate_gate.wait(timeout=5)
        return self.check

    def fetch_table(self, spreadsheet_id, credential, range_selector=None):
        range_selector = range_selector or self.default_range
        self.fetched.append(range_selector)
        gate = self.fetch_gates.get(range_selector)
        if gate is not None:
            self.started.set()
            gate.wait(timeout=5)
        return self.tables[range_selector]

    def list_table_names(self, spreadsheet_id, credential):
        return list(self.tables)


def _table(*rows: list) -> RawTable:
    return RawTable(headers=HEADERS, rows=[list(r) for r in rows])


@pytest.fixture
def connector() -> GatedConnector:
    return GatedConnector(
        {
            "Old": _table(["O1", "Old deal", "$1"]),
            "New": _table(["N1", "New deal", "$2"], ["N2", "Other", "$3"]),
            "Blank": _table(["", "", ""]),
        }
    )


class TestLoadSession:
    """Tests for LoadSession."""

    def test_load_stores_deals(self, connector: GatedConnector) -> None:
        session = LoadSession(connector)
        deals = asyncio.run(session.load(SHEET_ID, API_KEY, "New"))
        assert [d.deal_id for d in deals] == ["N1", "N2"]
        assert session.deals == deals
        assert session.error is None
        assert session.loading is False

    def test_newer_load_supersedes_in_flight(self, connector: GatedConnector) -> None:
        """The slow load's late result never replaces the newer one."""
        gate = threading.Event()
        connector.fetch_gates["Old"] = gate

        async def scenario():
            session = LoadSession(connector)
            slow = asyncio.create_task(session.load(SHEET_ID, API_KEY, "Old"))
            await asyncio.to_thread(connector.started.wait, 5)
            fast = await session.load(SHEET_ID, API_KEY, "New")
            gate.set()
            with pytest.raises(LoadSuperseded):
                await slow
            return session, fast

        session, fast = asyncio.run(scenario())
        assert [d.deal_id for d in fast] == ["N1", "N2"]
        assert [d.deal_id for d in session.deals] == ["N1", "N2"]

    def test_cancel_between_round_trips_skips_fetch(self, connector: GatedConnector) -> None:
        gate = threading.Event()
        connector.validate_gate = gate

        async def scenario():
            session = LoadSession(connector)
            task = asyncio.create_task(session.load(SHEET_ID, API_KEY, "New"))
            await asyncio.to_thread(connector.started.wait, 5)
            session.cancel()
            gate.set()
            with pytest.raises(LoadSuperseded):
                await task
            return session

        session = asyncio.run(scenario())
        assert connector.fetched == []
        assert session.deals == []

    def test_caller_cancellation_propagates(self, connector: GatedConnector) -> None:
        gate = threading.Event()
        connector.fetch_gates["New"] = gate

        async def scenario():
            session = LoadSession(connector)
            task = asyncio.create_task(session.load(SHEET_ID, API_KEY, "New"))
            await asyncio.to_thread(connector.started.wait, 5)
            task.cancel()
            gate.set()
            with pytest.raises(asyncio.CancelledError):
                await task
            return session

        session = asyncio.run(scenario())
        assert session.deals == []

    def test_error_keeps_previous_deals(self, connector: GatedConnector) -> None:
        session = LoadSession(connector)
        asyncio.run(session.load(SHEET_ID, API_KEY, "Old"))
        connector.check = ConnectionCheck.failed(AccessDenied("Access denied"))
        with pytest.raises(AccessDenied):
            asyncio.run(session.load(SHEET_ID, API_KEY, "New"))
        assert [d.deal_id for d in session.deals] == ["O1"]
        assert isinstance(session.error, AccessDenied)

    def test_all_rows_filtered_raises_no_deals(self, connector: GatedConnector) -> None:
        with pytest.raises(NoDeals, match="No valid deals found"):
            asyncio.run(LoadSession(connector).load(SHEET_ID, API_KEY, "Blank"))

    def test_allow_empty(self, connector: GatedConnector) -> None:
        session = LoadSession(connector, allow_empty=True)
        assert asyncio.run(session.load(SHEET_ID, API_KEY, "Blank")) == []

    def test_no_range_uses_connector_default(self, connector: GatedConnector) -> None:
        deals = asyncio.run(LoadSession(connector).load(SHEET_ID, API_KEY))
        assert connector.fetched == ["Old"]
        assert [d.deal_id for d in deals] == ["O1"]


class TestStartFromSettings:
    """Tests for LoadSession.from_settings / start (auto-load on startup)."""

    def test_auto_load_runs_configured_load(self, connector: GatedConnector) -> None:
        settings = LoadSettings(spreadsheet=SHEET_ID, api_key=API_KEY, range="New", auto_load=True)
        session = LoadSession.from_settings(settings, connector)
        deals = asyncio.run(session.start())
        assert connector.fetched == ["New"]
        assert [d.deal_id for d in session.deals] == ["N1", "N2"]
        assert deals == session.deals

    def test_auto_load_off_makes_no_calls(self, connector: GatedConnector) -> None:
        settings = LoadSettings(spreadsheet=SHEET_ID, api_key=API_KEY, range="New", auto_load=False)
        session = LoadSession.from_settings(settings, connector)
        assert asyncio.run(session.start()) is None
        assert connector.fetched == []
        assert session.deals == []

    def test_env_settings_drive_auto_load(self, connector: GatedConnector) -> None:
        """Both values set in the environment turn auto-load on; the flag can turn it off."""
        env = {"DEAL_SHEETS_SPREADSHEET": SHEET_ID, "DEAL_SHEETS_API_KEY": API_KEY, "DEAL_SHEETS_RANGE": "New"}
        session = LoadSession.from_settings(LoadSettings.from_env(env), connector)
        assert [d.deal_id for d in asyncio.run(session.start())] == ["N1", "N2"]

        disabled = LoadSession.from_settings(
            LoadSettings.from_env({**env, "DEAL_SHEETS_AUTO_LOAD": "false"}), connector
        )
        assert asyncio.run(disabled.start()) is None
        assert connector.fetched == ["New"]

    def test_plain_session_has_nothing_to_start(self, connector: GatedConnector) -> None:
        assert asyncio.run(LoadSession(connector).start()) is None
        assert connector.fetched == []
