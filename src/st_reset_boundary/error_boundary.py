"""Resettable error boundary for Streamlit applications."""

from __future__ import annotations

from collections.abc import Callable, Iterable, MutableMapping, Sequence
from functools import wraps
from typing import Any

import streamlit as st

from .fallback import FallbackComponentFactory, FallbackProps, fallback_spec
from .machine import (
    BoundaryConfig,
    BoundaryMachine,
    CallbackPolicy,
    ErrorHook,
    ResetHook,
    ResetKeysChangeHook,
    normalize_hooks,
)
from .plugins import render_output
from .state import ErrorContext


def _request_rerun() -> None:
    st.rerun()


def _component_name(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)


class ErrorBoundary:
    """Catches exceptions raised while rendering and shows a fallback until reset.

    Streamlit re-executes the script on every interaction, so an ``ErrorBoundary``
    object only carries configuration. The capture state lives in
    ``st.session_state[key]`` and survives reruns; give each boundary on a page
    its own ``key``.

    Args:
        key: Session-state slot holding this boundary's state.
        fallback: Static fallback. Strings are shown with `st.error()`, other values
            with `st.write()`.
        fallback_render: Called as ``fallback_render(props)`` with a `FallbackProps`;
            its return value is rendered like a static fallback.
        fallback_component: Called as ``fallback_component(error=..., reset_error_boundary=..., key=...)``.
        on_error: Single hook or iterable of hooks, called in order with
            ``(exc, context)`` on capture. Hook failures are logged and suppressed.
        on_reset: Called with the arguments given to ``reset_error_boundary``.
        on_reset_keys_change: Called with ``(prev_keys, reset_keys)`` before an
            automatic reset.
        reset_keys: Values watched between passes; a change while the fallback is
            showing resets the boundary.
        callback_errors: ``"suppress"`` logs failures of ``on_reset`` and
            ``on_reset_keys_change`` and resets anyway; ``"raise"`` propagates them
            and leaves the boundary armed.
        state: Mapping used instead of ``st.session_state``.

    Example:
        >>> boundary = ErrorBoundary(
        ...     key="profile",
        ...     fallback_component=default_fallback,
        ...     reset_keys=[st.session_state.user_id],
        ... )
        >>> @boundary.decorate
        ... def profile() -> None:
        ...     render_profile(st.session_state.user_id)

    """

    def __init__(
        self,
        *,
        key: str = "error_boundary",
        fallback: Any = None,
        fallback_render: Callable[[FallbackProps], Any] | None = None,
        fallback_component: FallbackComponentFactory | None = None,
        on_error: ErrorHook | Iterable[ErrorHook] | None = None,
        on_reset: ResetHook | None = None,
        on_reset_keys_change: ResetKeysChangeHook | None = None,
        reset_keys: Sequence[object] | None = None,
        callback_errors: CallbackPolicy = "suppress",
        state: MutableMapping[str, Any] | None = None,
    ) -> None:
        self.key = key
        self.config = BoundaryConfig(
            fallback=fallback_spec(fallback, fallback_render, fallback_component),
            on_error=normalize_hooks(on_error),
            on_reset=on_reset,
            on_reset_keys_change=on_reset_keys_change,
            reset_keys=reset_keys,
            callback_errors=callback_errors,
            key=key,
        )
        self._store = state

    @property
    def _state_store(self) -> MutableMapping[str, Any]:
        return self._store if self._store is not None else st.session_state

    @property
    def machine(self) -> BoundaryMachine:
        """The stored state machine, created with this configuration if missing."""
        machine = self._state_store.get(self.key)
        if not isinstance(machine, BoundaryMachine):
            machine = BoundaryMachine(self.config)
            self._state_store[self.key] = machine
        return machine

    @property
    def error(self) -> Exception | None:
        return self.machine.error

    def _acquire(self) -> tuple[BoundaryMachine, Sequence[object] | None, bool]:
        store = self._state_store
        machine = store.get(self.key)
        if not isinstance(machine, BoundaryMachine):
            machine = BoundaryMachine(self.config)
            store[self.key] = machine
            return machine, None, False
        prev_keys = machine.config.reset_keys
        machine.config = self.config
        return machine, prev_keys, True

    def render[**P, R](self, children: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> R | Any:
        """Run one pass: render ``children`` or the fallback, then run the lifecycle check.

        Returns the children's result, or the resolved fallback output.
        """
        machine, prev_keys, existed = self._acquire()
        was_armed = machine.state.armed
        if was_armed:
            result = self._render_fallback(machine)
        else:
            try:
                result = children(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                machine.notify_error(exc, ErrorContext.from_exception(exc, component=_component_name(children)))
                result = self._render_fallback(machine)

        if not existed:
            machine.on_mount()
        elif machine.on_configuration_update(prev_keys, self.config.reset_keys):
            _request_rerun()
        elif was_armed and not machine.state.armed:
            # The fallback reset the boundary while rendering; what it drew is stale.
            _request_rerun()
        return result

    def _render_fallback(self, machine: BoundaryMachine) -> Any:
        output = machine.resolve_fallback()
        render_output(output)
        return output

    def decorate[**P, R](self, func: Callable[P, R]) -> Callable[P, R | Any]:
        """Render ``func`` inside this boundary on every call."""

        @wraps(func)
        def _wrapped(*args: P.args, **kwargs: P.kwargs) -> R | Any:
            return self.render(func, *args, **kwargs)

        return _wrapped

    def wrap_callback[**P, R](self, callback: Callable[P, R]) -> Callable[P, R | None]:
        """Wrap a widget callback so its exceptions are captured by this boundary.

        Callbacks run before the script, outside any render pass; the next pass
        then shows the fallback.
        """

        @wraps(callback)
        def _wrapped(*args: P.args, **kwargs: P.kwargs) -> R | None:
            try:
                return callback(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                self.capture(exc, component=_component_name(callback))
                return None

        return _wrapped

    def capture(self, error: Exception, *, component: str | None = None) -> None:
        """Hand ``error`` to this boundary as if a child had raised it."""
        self.machine.notify_error(error, ErrorContext.from_exception(error, component=component))

    def reset(self, *args: Any) -> None:
        self.machine.reset(*args)


def with_error_boundary[**P, R](component: Callable[P, R], **boundary_options: Any) -> Callable[P, R | Any]:
    """Wrap ``component`` in an `ErrorBoundary` built from ``boundary_options``.

    All arguments are forwarded to ``component`` unchanged. Unless ``key`` is given,
    each wrapped component keeps its state under its own qualified name.
    """
    name = getattr(component, "__name__", None) or "Unknown"
    qualname = getattr(component, "__qualname__", None) or name
    boundary_options.setdefault("key", f"with_error_boundary({qualname})")
    boundary = ErrorBoundary(**boundary_options)

    def _wrapped(*args: P.args, **kwargs: P.kwargs) -> R | Any:
        return boundary.render(component, *args, **kwargs)

    _wrapped.__name__ = _wrapped.__qualname__ = f"with_error_boundary({name})"
    _wrapped.__doc__ = component.__doc__
    _wrapped.__wrapped__ = component  # type: ignore[attr-defined]
    return _wrapped
