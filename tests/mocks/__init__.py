"""Mock implementations for testing."""

from tests.mocks.feed import (
    ControlledFetch,
    ScriptedFetch,
    StubController,
    make_quote,
    make_snapshot,
    quote_payload,
    settle,
    snapshot_payload,
    wait_until,
)
from tests.mocks.service import FakePriceService


__all__ = [
    "ControlledFetch",
    "FakePriceService",
    "ScriptedFetch",
    "StubController",
    "make_quote",
    "make_snapshot",
    "quote_payload",
    "settle",
    "snapshot_payload",
    "wait_until",
]
