"""Shared telemetry: logging setup."""

from byki_admin.shared.telemetry.logging import setup_logging

__all__ = [
    "setup_logging",
]
