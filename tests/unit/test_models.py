"""
Unit tests for payload parsing.

Tests that valid ``/coins`` bodies become snapshots and that every
malformed body becomes a ShapeValidationFailure.
"""

from typing import Any

import orjson
import pytest

from arbdash.core.errors import RefreshError, ShapeValidationFailure
from arbdash.core.types import Exchange
from arbdash.feed.models import ServiceError, parse_snapshot, parse_snapshot_json
from tests.mocks import quote_payload, snapshot_payload


class TestParseSnapshot:
    """Tests for parse_snapshot with valid payloads."""

    def test_valid_payload(self, coins_payload: dict[str, Any]) -> None:
        snapshot = parse_snapshot(coins_payload)

        assert snapshot.updated_at == "14:03:27"
        assert [q.symbol for q in snapshot.opportunities] == ["BTC", "ETH"]
        assert [q.symbol for q in snapshot.all_quotes] == ["BTC", "ETH", "DOGE"]

    def test_field_mapping(self, coins_payload: dict[str, Any]) -> None:
        """Test wire names map onto quote fields."""
        eth = parse_snapshot(coins_payload).opportunities[1]

        assert eth.binance_price == 3450.0
        assert eth.gateio_price == 3422.0
        assert eth.spread_percent == 0.8
        assert eth.cheaper_exchange is Exchange.GATEIO
        assert eth.pricier_exchange is Exchange.BINANCE
        assert eth.is_opportunity is True

    def test_integer_prices_accepted(self) -> None:
        payload = snapshot_payload(
            opportunities=[], all_coins=[quote_payload("BTC", 0, binance=97500, gateio=97500)]
        )
        quote = parse_snapshot(payload).all_quotes[0]
        assert quote.binance_price == 97500.0

    def test_empty_lists(self) -> None:
        snapshot = parse_snapshot(snapshot_payload(opportunities=[], all_coins=[]))
        assert snapshot.opportunities == ()
        assert snapshot.all_quotes == ()

    def test_equal_spreads_keep_order(self) -> None:
        """Test ties are allowed in the ranked list."""
        opportunities = [
            quote_payload("AAA", 0.5, opportunity=True),
            quote_payload("BBB", 0.5, opportunity=True),
        ]
        snapshot = parse_snapshot(snapshot_payload(opportunities=opportunities))
        assert [q.symbol for q in snapshot.opportunities] == ["AAA", "BBB"]

    def test_returns_tuples(self, coins_payload: dict[str, Any]) -> None:
        snapshot = parse_snapshot(coins_payload)
        assert isinstance(snapshot.opportunities, tuple)
        assert isinstance(snapshot.all_quotes, tuple)


class TestShapeFailures:
    """Tests for payloads that must be rejected."""

    def _mutate_first_coin(self, **changes: Any) -> dict[str, Any]:
        payload = snapshot_payload()
        payload["tum_coinler"][0] = {**payload["tum_coinler"][0], **changes}
        return payload

    def test_missing_top_level_field(self, coins_payload: dict[str, Any]) -> None:
        del coins_payload["guncelleme_zamani"]
        with pytest.raises(ShapeValidationFailure, match="guncelleme_zamani"):
            parse_snapshot(coins_payload)

    def test_missing_coin_field(self) -> None:
        payload = snapshot_payload()
        del payload["tum_coinler"][2]["arbitraj_firsati"]
        with pytest.raises(ShapeValidationFailure):
            parse_snapshot(payload)

    @pytest.mark.parametrize(
        "changes",
        [
            {"binance_fiyat": "97500"},
            {"gateio_fiyat": True},
            {"fark_yuzde": None},
            {"binance_fiyat": -1.0},
            {"arbitraj_firsati": "true"},
            {"arbitraj_firsati": 1},
            {"symbol": ""},
            {"symbol": 42},
            {"ucuz_borsa": "Kraken"},
            {"ucuz_borsa": "Gate.io", "pahali_borsa": "Gate.io"},
        ],
    )
    def test_bad_coin_values(self, changes: dict[str, Any]) -> None:
        with pytest.raises(ShapeValidationFailure):
            parse_snapshot(self._mutate_first_coin(**changes))

    def test_duplicate_symbol(self) -> None:
        coins = [quote_payload("BTC"), quote_payload("BTC")]
        with pytest.raises(ShapeValidationFailure, match="Duplicate symbol"):
            parse_snapshot(snapshot_payload(opportunities=[], all_coins=coins))

    def test_unsorted_opportunities(self) -> None:
        opportunities = [
            quote_payload("ETH", 0.8, opportunity=True),
            quote_payload("BTC", 1.2, opportunity=True),
        ]
        with pytest.raises(ShapeValidationFailure, match="not sorted"):
            parse_snapshot(snapshot_payload(opportunities=opportunities))

    @pytest.mark.parametrize("data", [None, [], "coins", {"firsatlar": {}}])
    def test_wrong_container(self, data: Any) -> None:
        with pytest.raises(ShapeValidationFailure):
            parse_snapshot(data)

    def test_is_refresh_error(self) -> None:
        """Test shape failures carry the shape kind."""
        with pytest.raises(RefreshError) as exc_info:
            parse_snapshot({})
        assert exc_info.value.kind == "shape"


class TestParseSnapshotJson:
    """Tests for parse_snapshot_json."""

    def test_valid_bytes(self, coins_payload: dict[str, Any]) -> None:
        snapshot = parse_snapshot_json(orjson.dumps(coins_payload))
        assert len(snapshot.all_quotes) == 3

    @pytest.mark.parametrize("raw", [b"", b"<html>", b"{\"firsatlar\": [", "not json"])
    def test_invalid_json(self, raw: bytes | str) -> None:
        with pytest.raises(ShapeValidationFailure, match="Invalid JSON"):
            parse_snapshot_json(raw)


class TestServiceError:
    """Tests for the service error body."""

    def test_parses_wire_names(self) -> None:
        error = ServiceError.model_validate({"hata": True, "mesaj": "Binance unreachable"})
        assert error.error is True
        assert error.message == "Binance unreachable"
