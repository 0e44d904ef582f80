"""
Arbitrage dashboard view-model.

Polls a cross-exchange price service (Binance vs Gate.io), keeps the last
good snapshot on screen through transient failures, and derives the ranked
and filtered views a dashboard renders.
"""

__version__ = "1.0.0"
