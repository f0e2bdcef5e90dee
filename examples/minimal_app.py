from __future__ import annotations

import logging

import streamlit as st

from st_reset_boundary import ErrorBoundary, ErrorContext, default_fallback, use_error_handler

logging.basicConfig(level=logging.DEBUG)


def audit(exc: Exception, context: ErrorContext) -> None:
    # Replace with actual audit logging/metrics in production
    st.session_state["last_error"] = f"{type(exc).__name__} in {context.component}"


def trigger_error_callback() -> None:
    """Callback that raises an error - captured by wrap_callback."""
    _ = 1 / 0


st.title("st-reset-boundary demo")
# Outside the boundary so it stays usable while the fallback is showing
user_id = st.selectbox("User", [1, 2, 3])

# Picking another user resets the boundary once its fallback is showing
boundary = ErrorBoundary(
    key="profile",
    on_error=audit,
    fallback_component=default_fallback,
    reset_keys=[user_id],
)


@boundary.decorate
def profile(user: int) -> None:
    st.subheader("Profile")
    if user == 2:
        msg = "user 2 cannot be loaded"
        raise LookupError(msg)
    st.write(f"Profile of user {user}")

    st.subheader("Protected callback (on_click)")
    st.button("Trigger Error (Callback)", on_click=boundary.wrap_callback(trigger_error_callback))

    st.subheader("Reported error")
    set_error = use_error_handler(key="profile-report")
    st.button("Report Error", on_click=lambda: set_error(RuntimeError("reported from a callback")))


profile(user_id)
if "last_error" in st.session_state:
    st.caption(f"Last error: {st.session_state['last_error']}")
