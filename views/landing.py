import streamlit as st

from utils.inventory_view import InventoryController
from utils.router import DASHBOARD_PATH, SIGNIN_PATH, SIGNUP_PATH
from utils.session import SessionStore
from utils.ui_components import navigate

FEATURES = [
    ("📦", "Stock at a Glance", "Quantities, lots and pallet locations for every supply batch in one table."),
    ("⏰", "Expiration Tracking", "Flag expired batches and filter them out before they reach a shipment."),
    ("🔎", "Fast Search", "Find supplies by name or category in a couple of keystrokes."),
    ("💲", "Cost Details", "Keep unit box and cardboard box costs next to the stock they describe."),
]


def render(store: SessionStore, controller: InventoryController):
    """Public landing page"""
    st.title("🩺 Medical Supplies Inventory")
    st.markdown(
        """
    Track medical supply stock for your warehouse:
    - Items, quantities and expiration dates
    - Pallet locations, packaging and costs
    """
    )

    if store.is_authenticated:
        open_col, out_col, _ = st.columns([1, 1, 3])
        with open_col:
            if st.button("Open Inventory", type="primary", width="stretch"):
                navigate(DASHBOARD_PATH)
        with out_col:
            if st.button("Sign out", width="stretch"):
                store.sign_out()
                controller.reset()
                st.rerun()
    else:
        in_col, up_col, _ = st.columns([1, 1, 3])
        with in_col:
            if st.button("Sign In", type="primary", width="stretch"):
                navigate(SIGNIN_PATH)
        with up_col:
            if st.button("Create an Account", width="stretch"):
                navigate(SIGNUP_PATH)

    st.markdown("---")
    for col, (icon, title, description) in zip(st.columns(len(FEATURES)), FEATURES):
        with col:
            with st.container(border=True):
                st.markdown(f"### {icon}")
                st.markdown(f"**{title}**")
                st.caption(description)
