"""Unit tests for BaseConnector interface."""

from deal_sheets.connectors.base import BaseConnector, ConnectionCheck
from deal_sheets.models.raw import RawTable


class ConcreteConnector(BaseConnector):
    """Concrete implementation for testing base behavior."""

    source_id = "test"
    default_range = "Deals"

    def validate(self, spreadsheet_id, credential):
        return ConnectionCheck.ok()

    def fetch_table(self, spreadsheet_id, credential, range_selector=None):
        self.last_range = range_selector or self.default_range
        return RawTable(
            headers=["deal_id", "deal_name", "deal_value"],
            rows=[["1", "A", "$5"], ["", "", ""], ["2", "", "7"]],
        )

    def list_table_names(self, spreadsheet_id, credential):
        return [self.default_range]


class TestBaseConnector:
    """Tests for BaseConnector default implementations."""

    def test_fetch_deals_normalizes_and_filters(self) -> None:
        deals = ConcreteConnector().fetch_deals("abc", "key")
        assert [d.deal_id for d in deals] == ["1", "2"]
        assert deals[0].deal_value == 5.0
        assert deals[1].deal_name == "Unnamed Deal"

    def test_normalize_keeps_artifacts(self) -> None:
        """normalize returns candidates; filtering happens separately."""
        connector = ConcreteConnector()
        candidates = connector.normalize(connector.fetch_table("abc", "key"))
        assert len(candidates) == 3

    def test_fetch_deals_defaults_to_connector_range(self) -> None:
        connector = ConcreteConnector()
        connector.fetch_deals("abc", "key")
        assert connector.last_range == "Deals"

    def test_fetch_deals_renames_repeated_ids_after_filtering(self) -> None:
        """An artifact row sharing an id with a real deal does not rename it."""

        class RepeatedIds(ConcreteConnector):
            def fetch_table(self, spreadsheet_id, credential, range_selector=None):
                return RawTable(
                    headers=["deal_id", "deal_name", "deal_value"],
                    rows=[["D1", "", ""], ["D1", "Acme", "$5"], ["D1", "Birch", "$6"]],
                )

        deals = RepeatedIds().fetch_deals("abc", "key")
        assert [(d.deal_id, d.deal_name) for d in deals] == [("D1", "Acme"), ("D1-2", "Birch")]


class TestConnectionCheck:
    def test_ok(self) -> None:
        check = ConnectionCheck.ok()
        assert check.valid is True
        check.raise_for_error()
