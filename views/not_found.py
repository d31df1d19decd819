import streamlit as st

from utils.router import LANDING_PATH
from utils.ui_components import navigate


def render(store, controller):
    st.title("404")
    st.subheader("Page not found")
    st.write("The page you are looking for does not exist.")
    if st.button("Go back home"):
        navigate(LANDING_PATH)
