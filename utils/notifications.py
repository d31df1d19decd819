from typing import List, Tuple

import streamlit as st

ICONS = {
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
}


class NotificationQueue:
    """
    Toast messages waiting to be shown.

    Handlers usually call st.rerun() right after reporting an outcome, which
    would drop a toast raised in the same run. Messages are queued in session
    state instead and shown by flush() at the top of the next render.
    """

    def __init__(self):
        self.pending: List[Tuple[str, str]] = []

    def success(self, message: str):
        self.pending.append(("success", message))

    def error(self, message: str):
        self.pending.append(("error", message))

    def info(self, message: str):
        self.pending.append(("info", message))

    def drain(self) -> List[Tuple[str, str]]:
        pending, self.pending = self.pending, []
        return pending

    def flush(self):
        for level, message in self.drain():
            st.toast(message, icon=ICONS.get(level))
