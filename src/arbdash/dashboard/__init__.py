"""Presentation adapters: terminal panel and HTTP/JSON API."""

from arbdash.dashboard.reporter import CLIReporter
from arbdash.dashboard.server import create_app, main


__all__ = [
    "CLIReporter",
    "create_app",
    "main",
]
