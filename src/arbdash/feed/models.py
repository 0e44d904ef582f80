"""
Pydantic models for the price service payload.

These models provide strict parsing of the ``/coins`` response at the
system boundary. Anything that fails here becomes a
``ShapeValidationFailure``; nothing partially typed travels inward.
"""

from typing import Any

import orjson
from pydantic import (
    BaseModel,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

from arbdash.core.errors import ShapeValidationFailure
from arbdash.core.types import CoinQuote, Exchange, Snapshot


class CoinQuotePayload(BaseModel):
    """Single coin comparison as sent by the service."""

    symbol: StrictStr = Field(min_length=1)
    binance_price: float = Field(alias="binance_fiyat", ge=0.0, allow_inf_nan=False)
    gateio_price: float = Field(alias="gateio_fiyat", ge=0.0, allow_inf_nan=False)
    spread_percent: float = Field(alias="fark_yuzde", allow_inf_nan=False)
    cheaper_exchange: Exchange = Field(alias="ucuz_borsa")
    pricier_exchange: Exchange = Field(alias="pahali_borsa")
    is_opportunity: StrictBool = Field(alias="arbitraj_firsati")

    model_config = {"populate_by_name": True}

    @field_validator("binance_price", "gateio_price", "spread_percent", mode="before")
    @classmethod
    def require_json_number(cls, v: Any) -> Any:
        """Reject numeric strings and bools that lax float parsing would accept."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"Expected a number, got {type(v).__name__}")
        return v

    @model_validator(mode="after")
    def check_exchanges_differ(self) -> "CoinQuotePayload":
        """A coin cannot be cheapest and priciest on the same exchange."""
        if self.cheaper_exchange is self.pricier_exchange:
            raise ValueError(
                f"{self.symbol}: cheaper and pricier exchange are both "
                f"{self.cheaper_exchange.value}"
            )
        return self

    def to_quote(self) -> CoinQuote:
        """Convert to the internal immutable type."""
        return CoinQuote(
            symbol=self.symbol,
            binance_price=self.binance_price,
            gateio_price=self.gateio_price,
            spread_percent=self.spread_percent,
            cheaper_exchange=self.cheaper_exchange,
            pricier_exchange=self.pricier_exchange,
            is_opportunity=self.is_opportunity,
        )


class SnapshotPayload(BaseModel):
    """Full ``/coins`` response."""

    opportunities: list[CoinQuotePayload] = Field(alias="firsatlar")
    all_quotes: list[CoinQuotePayload] = Field(alias="tum_coinler")
    updated_at: StrictStr = Field(alias="guncelleme_zamani")

    model_config = {"populate_by_name": True}

    @field_validator("opportunities", "all_quotes", mode="after")
    @classmethod
    def check_unique_symbols(cls, v: list[CoinQuotePayload]) -> list[CoinQuotePayload]:
        """Symbols must be unique within each list."""
        seen: set[str] = set()
        for quote in v:
            if quote.symbol in seen:
                raise ValueError(f"Duplicate symbol {quote.symbol!r}")
            seen.add(quote.symbol)
        return v

    @field_validator("opportunities", mode="after")
    @classmethod
    def check_descending_spread(cls, v: list[CoinQuotePayload]) -> list[CoinQuotePayload]:
        """Opportunities must arrive ranked by descending spread."""
        for prev, cur in zip(v, v[1:]):
            if cur.spread_percent > prev.spread_percent:
                raise ValueError(
                    f"Opportunities not sorted by spread: {prev.symbol} "
                    f"({prev.spread_percent}) before {cur.symbol} ({cur.spread_percent})"
                )
        return v

    def to_snapshot(self) -> Snapshot:
        """Convert to the internal immutable snapshot."""
        return Snapshot(
            opportunities=tuple(q.to_quote() for q in self.opportunities),
            all_quotes=tuple(q.to_quote() for q in self.all_quotes),
            updated_at=self.updated_at,
        )


class ServiceError(BaseModel):
    """Error body the service sends alongside a failure status."""

    error: bool = Field(default=True, alias="hata")
    message: str = Field(alias="mesaj")

    model_config = {"populate_by_name": True}


def parse_snapshot(data: Any) -> Snapshot:
    """
    Validate a decoded payload and build a snapshot.

    Args:
        data: Decoded JSON value.

    Returns:
        Typed, immutable snapshot.

    Raises:
        ShapeValidationFailure: If the payload does not match the expected shape.
    """
    try:
        payload = SnapshotPayload.model_validate(data)
    except ValidationError as e:
        raise ShapeValidationFailure(
            f"Invalid snapshot payload ({e.error_count()} errors): {_first_error(e)}"
        ) from e
    return payload.to_snapshot()


def parse_snapshot_json(raw: bytes | str) -> Snapshot:
    """
    Decode and validate a raw JSON body.

    Raises:
        ShapeValidationFailure: On malformed JSON or an invalid payload.
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise ShapeValidationFailure(f"Invalid JSON response: {e}") from e
    return parse_snapshot(data)


def _first_error(e: ValidationError) -> str:
    """Render the first validation error as ``loc: msg``."""
    err = e.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}" if loc else err["msg"]
