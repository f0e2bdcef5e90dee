"""Stateful boundary: owns one ``BoundaryState`` and runs the caller's callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol, cast

from . import state as transitions
from .fallback import FallbackProps, FallbackSpec, resolve_fallback
from .state import BoundaryState, ErrorContext

logger = logging.getLogger(__name__)

type CallbackPolicy = Literal["suppress", "raise"]


class ErrorHook(Protocol):
    """Protocol for hooks that run side effects when an error is captured.

    Used for audit logging, notifications, metrics collection, etc.
    """

    def __call__(self, exc: Exception, context: ErrorContext, /) -> None:
        """Handle the captured exception."""
        ...


class ResetHook(Protocol):
    def __call__(self, *args: Any) -> None: ...


class ResetKeysChangeHook(Protocol):
    def __call__(self, prev_keys: Sequence[object] | None, reset_keys: Sequence[object] | None, /) -> None: ...


def normalize_hooks(on_error: ErrorHook | Iterable[ErrorHook] | None) -> tuple[ErrorHook, ...]:
    if on_error is None:
        return ()
    if callable(on_error):
        return (on_error,)
    return tuple(cast("Iterable[ErrorHook]", on_error))


@dataclass(frozen=True, slots=True)
class BoundaryConfig:
    """Everything a caller supplies on a pass. Replaced wholesale each pass."""

    fallback: FallbackSpec | None = None
    on_error: tuple[ErrorHook, ...] = ()
    on_reset: ResetHook | None = None
    on_reset_keys_change: ResetKeysChangeHook | None = None
    reset_keys: Sequence[object] | None = None
    callback_errors: CallbackPolicy = "suppress"
    key: str = "error_boundary"


class BoundaryMachine:
    """Capture/reset state machine for one boundary instance.

    The host calls ``notify_error`` when a child raises, ``on_mount`` or
    ``on_configuration_update`` after every pass, and ``resolve_fallback`` for
    what to display while armed. Callers reset through ``reset`` or by changing reset keys.
    """

    def __init__(self, config: BoundaryConfig | None = None) -> None:
        self.config = config or BoundaryConfig()
        self._state = transitions.CLEAR

    @property
    def state(self) -> BoundaryState:
        return self._state

    @property
    def error(self) -> Exception | None:
        return self._state.error

    def notify_error(self, error: Exception, context: ErrorContext) -> None:
        self._state = transitions.notify_error(self._state, error, context)
        logger.debug("Boundary %r captured %s", self.config.key, type(error).__name__)
        for hook in self.config.on_error:
            try:
                hook(error, context)
            except Exception:
                logger.exception("on_error hook failed for boundary %r", self.config.key)

    def on_mount(self) -> None:
        self._state = transitions.observe_mount(self._state)

    def on_configuration_update(
        self,
        prev_keys: Sequence[object] | None,
        new_keys: Sequence[object] | None,
    ) -> bool:
        """Post-render check. Returns True when changed reset keys cleared the boundary."""
        next_state, changed = transitions.on_configuration_update(self._state, prev_keys, new_keys)
        if not changed:
            self._state = next_state
            return False
        if self.config.on_reset_keys_change is not None:
            self._run_callback("on_reset_keys_change", self.config.on_reset_keys_change, prev_keys, new_keys)
        self._state = next_state
        logger.debug("Boundary %r reset by reset_keys change", self.config.key)
        return True

    def reset(self, *args: Any) -> None:
        """Explicit reset; ``args`` are forwarded to ``on_reset``."""
        if self.config.on_reset is not None:
            self._run_callback("on_reset", self.config.on_reset, *args)
        self._state = transitions.CLEAR
        logger.debug("Boundary %r reset", self.config.key)

    def fallback_props(self) -> FallbackProps:
        if self._state.error is None:
            msg = "fallback_props() requires an armed boundary"
            raise RuntimeError(msg)
        return FallbackProps(error=self._state.error, reset_error_boundary=self.reset, key=self.config.key)

    def resolve_fallback(self) -> Any:
        """Resolve the configured fallback for the captured error."""
        return resolve_fallback(self.config.fallback, self.fallback_props())

    def _run_callback(self, name: str, callback: Callable[..., object], *args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            if self.config.callback_errors == "raise":
                raise
            logger.exception("%s callback failed for boundary %r", name, self.config.key)
