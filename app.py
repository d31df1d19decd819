import logging
import os

import streamlit as st
from dotenv import load_dotenv

from utils.inventory_view import InventoryController
from utils.item_repository import ItemRepository
from utils.notifications import NotificationQueue
from utils.router import resolve_route
from utils.session import SessionStore
from utils.supabase_handler import SupabaseHandler
from utils.ui_components import navigate
from views import dashboard, landing, not_found, signin, signup

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# Set page configuration
st.set_page_config(
    page_title="🩺 Medical Supplies Inventory",
    page_icon="🩺",
    layout="wide",
    initial_sidebar_state="collapsed",
)

PAGES = {
    "landing": landing.render,
    "signin": signin.render,
    "signup": signup.render,
    "dashboard": dashboard.render,
    "not_found": not_found.render,
}


def init_session_state():
    """Create the per-browser-session objects on first run"""
    if "notifications" not in st.session_state:
        st.session_state.notifications = NotificationQueue()
    if "supabase" not in st.session_state:
        try:
            st.session_state.supabase = SupabaseHandler()
        except ValueError as e:
            logger.error(str(e))
            st.error(f"❌ {e}")
            st.info("Set SUPABASE_URL and SUPABASE_ANON_KEY in the environment or a .env file.")
            st.stop()
    if "session_store" not in st.session_state:
        st.session_state.session_store = SessionStore(st.session_state.supabase)
    if "inventory" not in st.session_state:
        st.session_state.inventory = InventoryController(
            ItemRepository(st.session_state.supabase), st.session_state.notifications
        )


def main():
    init_session_state()
    store = st.session_state.session_store
    controller = st.session_state.inventory

    store.ensure_fresh()
    controller.sync_with_session(store.is_authenticated)

    decision = resolve_route(st.query_params.get("path"), store.is_authenticated)
    if decision.redirect:
        logger.info(f"Redirecting to {decision.redirect}")
        navigate(decision.redirect)

    st.session_state.notifications.flush()
    PAGES[decision.page](store, controller)


if __name__ == "__main__":
    main()
