from __future__ import annotations

import pytest

from st_reset_boundary.state import (
    CLEAR,
    BoundaryState,
    ErrorContext,
    Phase,
    notify_error,
    observe_mount,
    on_configuration_update,
    reset_keys_changed,
    same_value,
)

CONTEXT = ErrorContext(component_stack="    in child (app.py:1)")


def armed(error: Exception | None = None) -> BoundaryState:
    return notify_error(CLEAR, error or RuntimeError("boom"), CONTEXT)


def test_initial_state_is_clear() -> None:
    assert CLEAR.phase is Phase.CLEAR
    assert CLEAR.error is None
    assert not CLEAR.armed


def test_capture_arms_first_pass() -> None:
    error = RuntimeError("boom")
    state = notify_error(CLEAR, error, CONTEXT)
    assert state.phase is Phase.ARMED_FIRST_PASS
    assert state.error is error
    assert state.context is CONTEXT
    assert state.armed


def test_recapture_replaces_error_and_keeps_phase() -> None:
    settled = observe_mount(armed())
    second = ValueError("again")
    state = notify_error(settled, second, CONTEXT)
    assert state.phase is Phase.ARMED_SETTLED
    assert state.error is second


@pytest.mark.parametrize(("prev", "new"), [(None, None), ([1], [2]), ([1, 2], [1])])
def test_updates_while_clear_do_nothing(prev: list[int] | None, new: list[int] | None) -> None:
    assert on_configuration_update(CLEAR, prev, new) == (CLEAR, False)


def test_first_update_after_capture_skips_key_comparison() -> None:
    state, reset = on_configuration_update(armed(), [1], [2])
    assert not reset
    assert state.phase is Phase.ARMED_SETTLED


def test_second_update_compares_keys() -> None:
    state, _ = on_configuration_update(armed(), [1, 2], [1, 2])
    state, reset = on_configuration_update(state, [1, 2], [1, 3])
    assert reset
    assert state == CLEAR


def test_unchanged_keys_keep_boundary_armed() -> None:
    error = RuntimeError("boom")
    state, _ = on_configuration_update(armed(error), [1, 2], [1, 2])
    state, reset = on_configuration_update(state, [1, 2], [1, 2])
    assert not reset
    assert state.phase is Phase.ARMED_SETTLED
    assert state.error is error


def test_mount_settles_a_first_pass_capture() -> None:
    state = observe_mount(armed())
    assert state.phase is Phase.ARMED_SETTLED
    _, reset = on_configuration_update(state, [1], [2])
    assert reset


def test_mount_leaves_clear_state_alone() -> None:
    assert observe_mount(CLEAR) is CLEAR


def test_context_from_exception_lists_innermost_frame_first() -> None:
    def inner() -> None:
        msg = "boom"
        raise RuntimeError(msg)

    def outer() -> None:
        inner()

    try:
        outer()
    except RuntimeError as exc:
        context = ErrorContext.from_exception(exc, component="outer")

    lines = context.component_stack.splitlines()
    assert lines[0].startswith("    in inner (")
    assert lines[1].startswith("    in outer (")
    assert context.component == "outer"


class TestResetKeysChanged:
    def test_none_and_empty_are_equal(self) -> None:
        assert not reset_keys_changed(None, [])
        assert not reset_keys_changed([], None)
        assert not reset_keys_changed(None, None)

    def test_length_change(self) -> None:
        assert reset_keys_changed([1], [1, 2])
        assert reset_keys_changed(None, [1])

    def test_equal_primitives(self) -> None:
        assert not reset_keys_changed([1, "a", None, 2.5], [1, "a", None, 2.5])

    def test_positional_change(self) -> None:
        assert reset_keys_changed([1, 2], [2, 1])

    def test_structurally_equal_objects_count_as_changed(self) -> None:
        assert reset_keys_changed([{"id": 1}], [{"id": 1}])
        assert reset_keys_changed([[1]], [[1]])

    def test_same_object_is_unchanged(self) -> None:
        user = {"id": 1}
        assert not reset_keys_changed([user], [user])


class TestSameValue:
    def test_nan_is_same_as_nan(self) -> None:
        assert same_value(float("nan"), float("nan"))

    def test_signed_zeros_differ(self) -> None:
        assert not same_value(0.0, -0.0)
        assert same_value(-0.0, -0.0)

    def test_bool_and_int_differ(self) -> None:
        assert not same_value(1, True)  # noqa: FBT003

    def test_int_and_float_differ(self) -> None:
        assert not same_value(1, 1.0)

    def test_large_ints_compare_by_value(self) -> None:
        assert same_value(10**20, int("1" + "0" * 20))
