"""Hand errors from non-rendering code to the nearest enclosing boundary."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

import streamlit as st


class ErrorReporter:
    """Stores an error until the next evaluation, then raises it.

    Raising inside a boundary's render pass is what lets the boundary capture it,
    so ``report`` must be called from code the boundary renders.
    """

    def __init__(self, store: MutableMapping[str, Any], key: str = "error_handler") -> None:
        self._store = store
        self._key = key

    def set_error(self, error: Exception | None) -> None:
        if error is None:
            self._store.pop(self._key, None)
        else:
            self._store[self._key] = error

    def report(self, error: Exception | None = None) -> Callable[[Exception | None], None]:
        """Raise ``error`` or the stored error; otherwise return the setter.

        A stored error is cleared as it is raised.
        """
        if error is not None:
            raise error
        stored = self._store.pop(self._key, None)
        if stored is not None:
            raise stored
        return self.set_error


def use_error_handler(
    error: Exception | None = None,
    *,
    key: str = "error_handler",
    state: MutableMapping[str, Any] | None = None,
) -> Callable[[Exception | None], None]:
    """Streamlit shortcut for `ErrorReporter.report` backed by ``st.session_state``.

    Example:
        >>> set_error = use_error_handler(key="upload")
        >>> st.button("Upload", on_click=lambda: set_error(ValueError("bad file")))

    """
    return ErrorReporter(state if state is not None else st.session_state, key).report(error)
