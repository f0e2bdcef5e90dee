"""Exceptions raised by the boundary itself (never by the code it protects)."""

from __future__ import annotations


class BoundaryError(Exception):
    """Base class for st-reset-boundary errors."""


class FallbackConfigurationError(BoundaryError):
    """Raised when a boundary is armed but has no fallback to render.

    This is a programmer error and propagates past the boundary that raised it.
    """

    def __init__(self) -> None:
        super().__init__("ErrorBoundary requires either a fallback, fallback_render, or fallback_component")
