"""
Application settings for the UI session.
"""

from __future__ import annotations

from typing import Any, Dict

import streamlit as st

from gs1_label.config import DEFAULT_SETTINGS, LabelSettings, load_settings


SESSION_KEY = "settings_overrides"


@st.cache_data(ttl=300)
def load_env_settings() -> Dict[str, Any]:
    """Defaults merged with GS1_LABEL_* environment variables."""
    return load_settings().to_dict()


def current_settings() -> LabelSettings:
    overrides = st.session_state.get(SESSION_KEY, {})
    return load_settings({**load_env_settings(), **overrides})


def save_settings(updates: Dict[str, Any]) -> LabelSettings:
    """
    Validate and keep the updates for this session.

    Raises:
        ValueError: invalid value
    """
    merged = {**st.session_state.get(SESSION_KEY, {}), **updates}
    settings = load_settings({**load_env_settings(), **merged})
    st.session_state[SESSION_KEY] = merged
    return settings


def reset_settings() -> None:
    st.session_state.pop(SESSION_KEY, None)
    load_env_settings.clear()


__all__ = ["DEFAULT_SETTINGS", "current_settings", "load_env_settings", "reset_settings", "save_settings"]
