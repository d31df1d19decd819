from datetime import datetime

import streamlit as st

from constants.supply_types import EXPIRED_FILTER_OPTIONS, TYPE_FILTER_OPTIONS
from utils.inventory_view import (
    Closed,
    Creating,
    Editing,
    InventoryController,
    Viewing,
    items_to_dataframe,
)
from utils.router import LANDING_PATH
from utils.session import SessionStore
from utils.ui_components import (
    create_item_grid,
    navigate,
    render_item_details,
    render_item_form,
)


# InventoryState attribute -> widget key
FILTER_WIDGET_KEYS = {
    "search_text": "filter_search_text",
    "expired_filter": "filter_expired",
    "type_filter": "filter_type",
}


def seed_filter_widgets(session_state, state):
    """Give the filter widgets their starting value once; afterwards the widgets own it"""
    for attribute, key in FILTER_WIDGET_KEYS.items():
        if key not in session_state:
            session_state[key] = getattr(state, attribute)


def clear_filter_widgets(session_state):
    for key in FILTER_WIDGET_KEYS.values():
        session_state.pop(key, None)


def _reset_grid():
    # A new grid key drops the old row selection
    st.session_state["grid_version"] = st.session_state.get("grid_version", 0) + 1


def _dismiss_dialog():
    """Runs when a dialog is closed with its X, Escape or a click outside"""
    st.session_state["inventory"].close_dialog()
    _reset_grid()


def _close(controller: InventoryController):
    controller.close_dialog()
    _reset_grid()
    st.rerun()


@st.dialog("Item Details", width="large", on_dismiss=_dismiss_dialog)
def item_detail_dialog(controller: InventoryController, item):
    st.subheader(item.name)
    st.caption("View detailed information about this medical supply item")
    render_item_details(item)

    close_col, edit_col = st.columns(2)
    with close_col:
        if st.button("Close", width="stretch", key="detail_close"):
            _close(controller)
    with edit_col:
        if st.button("✏️ Edit Item", type="primary", width="stretch", key="detail_edit"):
            controller.begin_edit(item)
            st.rerun()


def _render_draft_dialog(controller: InventoryController, key_prefix: str, save_label: str):
    draft = render_item_form(controller.state.draft, key_prefix)
    controller.update_draft(draft)

    cancel_col, save_col = st.columns(2)
    with cancel_col:
        if st.button("Cancel", width="stretch", key=f"{key_prefix}_cancel"):
            _close(controller)
    with save_col:
        if st.button(save_label, type="primary", width="stretch", key=f"{key_prefix}_save"):
            with st.spinner("Saving..."):
                saved = controller.save()
            if saved:
                _reset_grid()
            st.rerun()


@st.dialog("Edit Item", width="large", on_dismiss=_dismiss_dialog)
def edit_item_dialog(controller: InventoryController, item):
    st.caption("Update the information for this medical supply item")
    _render_draft_dialog(controller, f"edit_{item.id}_{controller.state.form_version}", "Save Changes")


@st.dialog("New Item", width="large", on_dismiss=_dismiss_dialog)
def new_item_dialog(controller: InventoryController):
    st.caption("Add a new medical supply item to the inventory")
    _render_draft_dialog(controller, f"new_{controller.state.form_version}", "Create Item")


def render(store: SessionStore, controller: InventoryController):
    """Medical supplies inventory, only reachable with a session"""
    header_col, user_col = st.columns([4, 1])
    with header_col:
        st.title("🩺 Medical Supplies Inventory")
    with user_col:
        if store.session and store.session.user.email:
            st.caption(f"Signed in as {store.session.user.email}")
        if st.button("Sign Out", width="stretch"):
            store.sign_out()
            controller.reset()
            clear_filter_widgets(st.session_state)
            navigate(LANDING_PATH)

    if not controller.state.loaded:
        with st.spinner("Loading medical supplies..."):
            controller.load_items()

    # Search and filters; keyed widgets keep their own value between runs
    seed_filter_widgets(st.session_state, controller.state)
    search_col, expired_col, type_col, new_col = st.columns([3, 1, 1, 1])
    with search_col:
        search_text = st.text_input(
            "Search items",
            placeholder="Search by name, type of supply...",
            key=FILTER_WIDGET_KEYS["search_text"],
        )
    with expired_col:
        expired_filter = st.selectbox(
            "Item expired",
            options=list(EXPIRED_FILTER_OPTIONS),
            format_func=lambda value: EXPIRED_FILTER_OPTIONS[value],
            key=FILTER_WIDGET_KEYS["expired_filter"],
        )
    with type_col:
        type_filter = st.selectbox(
            "Type of supply",
            options=TYPE_FILTER_OPTIONS,
            format_func=lambda value: "All" if value == "all" else value,
            key=FILTER_WIDGET_KEYS["type_filter"],
        )
    with new_col:
        st.write("")
        if st.button("➕ New Item", type="primary", width="stretch"):
            controller.begin_create()
            st.rerun()

    controller.set_filters(search_text, expired_filter, type_filter)

    state = controller.state
    st.write(f"Showing {len(state.filtered_items)} out of {len(state.items)} items")

    df = items_to_dataframe(state.filtered_items)
    if df.empty:
        st.info("No items match the current filters." if state.items else "No medical supplies yet.")
    else:
        selected_id = create_item_grid(df, key=f"items_grid_{st.session_state.get('grid_version', 0)}")
        if selected_id and isinstance(state.dialog, Closed):
            item = controller.find_item(selected_id)
            if item is not None:
                controller.select_item(item)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        st.download_button(
            label=f"📥 Download Filtered Data as CSV ({len(df)} items)",
            data=df.drop(columns=["id"]).to_csv(index=False),
            file_name=f"medical_supplies_{timestamp}.csv",
            mime="text/csv",
        )

    # At most one dialog is open; the dialog state decides which
    dialog = state.dialog
    if isinstance(dialog, Viewing):
        item_detail_dialog(controller, dialog.item)
    elif isinstance(dialog, Editing):
        edit_item_dialog(controller, dialog.item)
    elif isinstance(dialog, Creating):
        new_item_dialog(controller)
