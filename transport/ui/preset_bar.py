"""Preset toolbar: name, save, load, reset."""

from __future__ import annotations
from dataclasses import replace
from typing import Tuple

import streamlit as st

from services.presets import (
    MalformedStoredPreset,
    PresetLoaded,
    PresetNotFound,
    PresetStore,
)
from services.storage import StorageError
from transport.models import TripParameters

FLASH_KEY = "flash"


def flash(level: str, message: str) -> None:
    """Queue a message that survives the next st.rerun()."""
    st.session_state[FLASH_KEY] = (level, message)


def show_flash() -> None:
    """Show and clear the queued message."""
    queued = st.session_state.pop(FLASH_KEY, None)
    if not queued:
        return
    level, message = queued
    getattr(st, level, st.info)(message)


def render_preset_bar(
    store: PresetStore,
    trip: TripParameters,
    rev: int,
) -> Tuple[TripParameters, bool]:
    """
    Render the preset toolbar.

    Returns:
        (trip, replaced). replaced is True after Load/Reset, when the whole
        form must be rebuilt. On a failed load or save the current trip
        stays in place.
    """
    c_name, c_save, c_load, c_reset = st.columns([3, 1, 1, 1])
    with c_name:
        name = st.text_input(
            "Preset name",
            value=trip.preset_name,
            key=f"preset_name_{rev}",
            placeholder="Name / preset",
            label_visibility="collapsed",
        )
    with c_save:
        save_clicked = st.button("💾 Save preset", use_container_width=True)
    with c_load:
        load_clicked = st.button("📂 Load", use_container_width=True)
    with c_reset:
        reset_clicked = st.button("🔄 Reset", use_container_width=True)

    trip = replace(trip, preset_name=name)

    if save_clicked:
        try:
            trip = store.save(name, trip)
        except StorageError as e:
            st.error(f"❌ Preset could not be saved: {e}")
        else:
            st.success("✅ Preset saved.")
            warning = getattr(store.storage, "get_last_warning", lambda: None)()
            if warning:
                st.warning(warning)
        return trip, False

    if load_clicked:
        try:
            result = store.load()
        except StorageError as e:
            st.error(f"❌ Preset could not be read: {e}")
            return trip, False
        if isinstance(result, PresetNotFound):
            st.info("ℹ️ No preset saved yet.")
            return trip, False
        if isinstance(result, MalformedStoredPreset):
            st.error(f"❌ Stored preset could not be loaded. {result.reason}")
            return trip, False
        if isinstance(result, PresetLoaded):
            flash("success", f"✅ Preset '{result.trip.preset_name or 'unnamed'}' loaded.")
            return result.trip, True

    if reset_clicked:
        flash("info", "Form reset.")
        return store.reset(), True

    return trip, False
