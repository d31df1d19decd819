import streamlit as st

from utils.auth_forms import submit_sign_up
from utils.inventory_view import InventoryController
from utils.router import SIGNIN_PATH
from utils.session import SessionStore
from utils.ui_components import navigate


def render(store: SessionStore, controller: InventoryController):
    """Account creation form"""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.subheader("Create an Account")

        with st.form("signup_form"):
            email = st.text_input("Email", placeholder="Email")
            password = st.text_input("Password", type="password", placeholder="Password")
            confirm_password = st.text_input(
                "Confirm Password", type="password", placeholder="Confirm Password"
            )
            submitted = st.form_submit_button("Sign Up", type="primary", width="stretch")

        if submitted:
            with st.spinner("Creating Account..."):
                error = submit_sign_up(
                    store, st.session_state.notifications, email, password, confirm_password
                )
            if error:
                st.error(error)
            else:
                st.rerun()

        st.caption("Already have an account?")
        if st.button("Sign in"):
            navigate(SIGNIN_PATH)
