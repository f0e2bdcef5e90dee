"""Streamlit rendering for fallback output."""

from __future__ import annotations

from typing import Any

import streamlit as st

from .fallback import ResetFn


def render_string_fallback(message: str) -> None:
    """Display a plain-text fallback with `st.error()`."""
    st.error(message)


def render_output(value: Any) -> None:
    """Render whatever a fallback resolved to.

    Fallbacks that draw with ``st.*`` themselves return ``None`` and render nothing
    more here. Strings go through `render_string_fallback`, anything else through
    `st.write()`.
    """
    if value is None:
        return
    if isinstance(value, str):
        render_string_fallback(value)
    else:
        st.write(value)


def default_fallback(*, error: Exception, reset_error_boundary: ResetFn, key: str = "error_boundary") -> None:
    """Stock fallback component: error message and a "Try again" button.

    Pass it as ``fallback_component=default_fallback``.
    """
    st.subheader("Something went wrong.")
    st.error(f"{type(error).__name__}: {error}")
    st.button("Try again", key=f"{key}-try-again", on_click=reset_error_boundary)
