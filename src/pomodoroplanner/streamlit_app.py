"""Streamlit form for building a Pomodoro plan.

Run with:

    streamlit run src/pomodoroplanner/streamlit_app.py

Every edit regenerates the plan. Numeric fields that do not parse are
ignored until they do. "Save settings" remembers the current values for
the next session and the download button delivers the plan as markdown.
"""
from __future__ import annotations

from typing import List

import streamlit as st

from pomodoroplanner import form as plan_form
from pomodoroplanner.log import setup_logger
from pomodoroplanner.settings import SettingsStore


def main() -> None:
    setup_logger()
    st.set_page_config(page_title="Pomodoro Planner", layout="centered")

    st.title("Generate Pomodoro Plan")

    store = SettingsStore()
    notices: List[str] = []
    if "form" not in st.session_state:
        st.session_state.form = plan_form.PlanForm(store.load(), notify=notices.append)
    form: plan_form.PlanForm = st.session_state.form
    form.notify = notices.append

    # Sidebar: interval lengths and toggles
    with st.sidebar:
        labels = {
            "pomodoro": "Pomodoro",
            "short_break": "Short Break",
            "long_break": "Long Break",
            "group": "Group",
        }
        for name, label in labels.items():
            value = st.text_input(label, value=form.fields[name], key=f"field_{name}")
            if value != form.fields[name]:
                form.edit(name, value)
        st.write("---")
        for name, label in (
            ("stats", "Include stats"),
            ("short_break_lines", "Include short breaks"),
            ("long_break_lines", "Include long breaks"),
        ):
            current = getattr(form.settings, plan_form.TOGGLES[name])
            enabled = st.checkbox(label, value=current, key=f"toggle_{name}")
            if enabled != current:
                form.toggle(name, enabled)

    c1, c2 = st.columns([1, 1])
    start = c1.text_input("Start", value=form.fields["start"])
    end = c2.text_input("End (HH:MM or number of pomodoros)", value=form.fields["end"])
    if start != form.fields["start"]:
        form.edit("start", start)
    if end != form.fields["end"]:
        form.edit("end", end)

    st.code(form.text or " ", language="markdown")

    c3, c4 = st.columns([1, 1])
    if c3.button("Save settings"):
        if store.save(form.settings):
            st.success("Settings saved")
        else:
            notices.append(f"Could not save settings to {store.path}")
    if form.result.is_empty:
        if c4.button("Download plan"):
            form.submit(lambda text, settings: None)
    else:
        c4.download_button(
            "Download plan",
            data=form.text + "\n",
            file_name="pomodoro-plan.md",
            mime="text/markdown",
            on_click=lambda: form.submit(lambda text, settings: store.save(settings)),
        )

    for message in notices:
        st.warning(message)


if __name__ == "__main__":
    main()
