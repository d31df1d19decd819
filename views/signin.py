import streamlit as st

from utils.auth_forms import submit_sign_in
from utils.inventory_view import InventoryController
from utils.router import SIGNUP_PATH
from utils.session import SessionStore
from utils.ui_components import navigate


def render(store: SessionStore, controller: InventoryController):
    """Sign-in form. The router sends the user on once the session is set."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.subheader("Sign in to your account")

        with st.form("signin_form"):
            email = st.text_input("Email", placeholder="Email")
            password = st.text_input("Password", type="password", placeholder="Password")
            submitted = st.form_submit_button("Sign In", type="primary", width="stretch")

        if submitted:
            with st.spinner("Signing in..."):
                error = submit_sign_in(store, st.session_state.notifications, email, password)
            if error:
                st.error(error)
            else:
                st.rerun()

        st.caption("Don't have an account?")
        if st.button("Sign up"):
            navigate(SIGNUP_PATH)
