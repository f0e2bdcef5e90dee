"""Boundary state record and its pure transitions.

The boundary has two observable states, clear and armed. Armed is split into
``ARMED_FIRST_PASS`` and ``ARMED_SETTLED``: the first lifecycle pass after a
capture never compares reset keys, because whatever caused the error may also
be one of the watched keys. Comparing on that pass would reset the boundary
before its fallback was ever shown and let the error fire again.

Every function here returns a new ``BoundaryState``; callbacks are run by
``BoundaryMachine``.
"""

from __future__ import annotations

import math
import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

_PRIMITIVES = (str, bytes, int, float, complex, bool, type(None))


class Phase(Enum):
    CLEAR = "clear"
    ARMED_FIRST_PASS = "armed_first_pass"
    ARMED_SETTLED = "armed_settled"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where a captured error happened."""

    component_stack: str
    component: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, component: str | None = None) -> ErrorContext:
        frames = traceback.extract_tb(exc.__traceback__)
        lines = [f"    in {frame.name} ({frame.filename}:{frame.lineno})" for frame in reversed(frames)]
        return cls(component_stack="\n".join(lines), component=component)


@dataclass(frozen=True, slots=True)
class BoundaryState:
    phase: Phase = Phase.CLEAR
    error: Exception | None = None
    context: ErrorContext | None = None

    @property
    def armed(self) -> bool:
        return self.phase is not Phase.CLEAR


CLEAR = BoundaryState()


def same_value(a: object, b: object) -> bool:
    """Identity comparison that treats equal primitive values as the same.

    NaN is the same as NaN and ``0.0`` differs from ``-0.0``. Distinct
    non-primitive objects always differ, however equal they look.
    """
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _PRIMITIVES):
        return False
    if isinstance(a, float):
        if math.isnan(a) and math.isnan(b):
            return True
        if a == 0.0 and b == 0.0:
            return math.copysign(1.0, a) == math.copysign(1.0, b)
    return a == b


def reset_keys_changed(prev: Sequence[object] | None, new: Sequence[object] | None) -> bool:
    prev = prev or ()
    new = new or ()
    if len(prev) != len(new):
        return True
    return any(not same_value(a, b) for a, b in zip(prev, new, strict=True))


def notify_error(state: BoundaryState, error: Exception, context: ErrorContext) -> BoundaryState:
    """Capture ``error``. A recapture while armed keeps the current phase."""
    phase = state.phase if state.armed else Phase.ARMED_FIRST_PASS
    return BoundaryState(phase=phase, error=error, context=context)


def observe_mount(state: BoundaryState) -> BoundaryState:
    if state.phase is Phase.ARMED_FIRST_PASS:
        return BoundaryState(Phase.ARMED_SETTLED, state.error, state.context)
    return state


def on_configuration_update(
    state: BoundaryState,
    prev_keys: Sequence[object] | None,
    new_keys: Sequence[object] | None,
) -> tuple[BoundaryState, bool]:
    """Run the post-render check.

    Returns the next state and whether the reset keys triggered a reset.
    """
    if state.phase is Phase.ARMED_FIRST_PASS:
        return BoundaryState(Phase.ARMED_SETTLED, state.error, state.context), False
    if state.phase is Phase.ARMED_SETTLED and reset_keys_changed(prev_keys, new_keys):
        return CLEAR, True
    return state, False
