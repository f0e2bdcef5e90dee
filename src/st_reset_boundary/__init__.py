"""Streamlit error boundary with fallback UI, reset keys and explicit reset."""

from __future__ import annotations

from .error_boundary import ErrorBoundary, with_error_boundary
from .errors import BoundaryError, FallbackConfigurationError
from .fallback import (
    ComponentFallback,
    FallbackProps,
    FallbackSpec,
    RenderFallback,
    StaticFallback,
    fallback_spec,
    resolve_fallback,
)
from .machine import BoundaryConfig, BoundaryMachine, ErrorHook, ResetHook, ResetKeysChangeHook
from .plugins import default_fallback
from .reporter import ErrorReporter, use_error_handler
from .state import BoundaryState, ErrorContext, Phase, reset_keys_changed

__all__ = [
    "BoundaryConfig",
    "BoundaryError",
    "BoundaryMachine",
    "BoundaryState",
    "ComponentFallback",
    "ErrorBoundary",
    "ErrorContext",
    "ErrorHook",
    "ErrorReporter",
    "FallbackConfigurationError",
    "FallbackProps",
    "FallbackSpec",
    "Phase",
    "RenderFallback",
    "ResetHook",
    "ResetKeysChangeHook",
    "StaticFallback",
    "default_fallback",
    "fallback_spec",
    "reset_keys_changed",
    "resolve_fallback",
    "use_error_handler",
    "with_error_boundary",
]
