"""
Inventory View Module

State and orchestration behind the medical supplies dashboard: loading the
item list, deriving the filtered view, tracking which dialog is open, and
saving the item being created or edited. Rendering lives in views/dashboard.py.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from constants.schemas import SupplyItem, SupplyItemDraft
from utils.item_repository import ItemRepository
from utils.notifications import NotificationQueue
from utils.supabase_handler import SupabaseError

logger = logging.getLogger(__name__)

EXPIRED_FILTERS = ("all", "expired", "not-expired")


# --- Dialog state: exactly one of these at a time ---


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Viewing:
    item: SupplyItem


@dataclass(frozen=True)
class Editing:
    item: SupplyItem


@dataclass(frozen=True)
class Creating:
    pass


DialogState = Union[Closed, Viewing, Editing, Creating]


def apply_filters(
    items: List[SupplyItem], search_text: str, expired_filter: str, type_filter: str
) -> List[SupplyItem]:
    """
    Narrow the item list by search text, expiration status and supply type.

    Args:
        items: Full item list, never modified
        search_text: Case-insensitive substring of name or type of supply; blank matches all
        expired_filter: 'all', 'expired' or 'not-expired'
        type_filter: Exact type of supply, or 'all'

    Returns:
        List[SupplyItem]: Matching items in their original order
    """
    if expired_filter not in EXPIRED_FILTERS:
        raise ValueError(f"Unknown expired filter: {expired_filter}")

    query = (search_text or "").strip().lower()

    def matches(item: SupplyItem) -> bool:
        matches_text = (
            not query
            or query in item.name.lower()
            or query in item.type_of_supply.lower()
        )
        matches_expiry = (
            expired_filter == "all"
            or (expired_filter == "expired" and item.is_expired)
            or (expired_filter == "not-expired" and not item.is_expired)
        )
        matches_type = type_filter == "all" or item.type_of_supply == type_filter
        return matches_text and matches_expiry and matches_type

    return [item for item in items if matches(item)]


def items_to_dataframe(items: List[SupplyItem]) -> pd.DataFrame:
    """Table rows for the dashboard grid and the CSV export"""
    columns = [
        "id",
        "Name",
        "Status",
        "Type of Supply",
        "Quantity",
        "Expires On",
        "Lot Number",
        "Company",
        "Pallet Location",
        "Image",
    ]
    rows = [
        {
            "id": item.id,
            "Name": item.name,
            "Status": item.status_label,
            "Type of Supply": item.type_of_supply,
            "Quantity": item.quantity,
            "Expires On": item.expires_on,
            "Lot Number": item.lot_number,
            "Company": item.company,
            "Pallet Location": item.pallet_location,
            "Image": item.image_url,
        }
        for item in items
    ]
    return pd.DataFrame(rows, columns=columns)


@dataclass
class InventoryState:
    items: List[SupplyItem] = field(default_factory=list)
    filtered_items: List[SupplyItem] = field(default_factory=list)
    search_text: str = ""
    expired_filter: str = "all"
    type_filter: str = "all"
    dialog: DialogState = field(default_factory=Closed)
    draft: Optional[SupplyItemDraft] = None
    loaded: bool = False
    # Bumped whenever a new draft starts so form widgets pick up its values
    form_version: int = 0


class InventoryController:
    """Drives the dashboard state; one instance per browser session"""

    def __init__(self, repository: ItemRepository, notifier: NotificationQueue):
        self.repository = repository
        self.notifier = notifier
        self.state = InventoryState()

    # --- Loading and filtering ---

    def load_items(self) -> bool:
        """Fetch every item. A failed reload keeps the list that is already shown."""
        try:
            items = self.repository.fetch_all()
        except SupabaseError as e:
            logger.error(f"Error fetching data: {e.message}")
            self.notifier.error(f"Failed to load medical supplies: {e.message}")
            return False
        except ValidationError as e:
            logger.error(f"Error parsing medical supplies: {str(e)}")
            self.notifier.error(
                f"Failed to load medical supplies: {e.error_count()} invalid value(s) in the stored data"
            )
            return False
        finally:
            self.state.loaded = True

        if not items:
            logger.info("No data found in database")
        self.state.items = items
        self._refilter()
        return True

    def set_filters(
        self,
        search_text: Optional[str] = None,
        expired_filter: Optional[str] = None,
        type_filter: Optional[str] = None,
    ):
        if search_text is not None:
            self.state.search_text = search_text
        if expired_filter is not None:
            self.state.expired_filter = expired_filter
        if type_filter is not None:
            self.state.type_filter = type_filter
        self._refilter()

    def _refilter(self):
        self.state.filtered_items = apply_filters(
            self.state.items,
            self.state.search_text,
            self.state.expired_filter,
            self.state.type_filter,
        )

    def reset(self):
        """Forget everything loaded for the previous user"""
        self.state = InventoryState()

    def sync_with_session(self, has_session: bool):
        """Reset when the session ended outside a sign-out click, e.g. a failed token refresh"""
        if not has_session and self.state.loaded:
            logger.info("Session ended, clearing loaded inventory")
            self.reset()

    def find_item(self, item_id: str) -> Optional[SupplyItem]:
        for item in self.state.items:
            if item.id == item_id:
                return item
        return None

    # --- Dialog transitions ---

    def select_item(self, item: SupplyItem):
        self.state.dialog = Viewing(item)

    def begin_edit(self, item: SupplyItem):
        self.state.form_version += 1
        self.state.draft = SupplyItemDraft.from_item(item)
        self.state.dialog = Editing(item)

    def begin_create(self):
        self.state.form_version += 1
        self.state.draft = SupplyItemDraft.blank()
        self.state.dialog = Creating()

    def close_dialog(self):
        self.state.dialog = Closed()
        self.state.draft = None

    def update_draft(self, draft: SupplyItemDraft):
        self.state.draft = draft

    # --- Saving ---

    def save(self) -> bool:
        """
        Validate the draft and create or update the item.

        Returns:
            bool: True when the item was saved and the dialog closed
        """
        dialog = self.state.dialog
        draft = self.state.draft
        if not isinstance(dialog, (Editing, Creating)) or draft is None:
            logger.warning("Save requested with no item being edited or created")
            return False

        missing = draft.missing_required()
        if missing:
            logger.info(f"Save blocked, missing required fields: {', '.join(missing)}")
            self.notifier.error("Please fill in all required fields")
            return False

        record = draft.to_record()

        if isinstance(dialog, Editing):
            try:
                self.repository.update(dialog.item.id, record)
            except SupabaseError as e:
                logger.error(f"Error updating item {dialog.item.id}: {e.message}")
                self.notifier.error("Failed to update item")
                return False
            self.notifier.success("Item updated successfully!")
        else:
            try:
                self.repository.insert(record)
            except SupabaseError as e:
                logger.error(f"Error creating item: {e.message}")
                self.notifier.error("Failed to create item")
                return False
            self.notifier.success("Item created successfully!")

        self.load_items()
        self.close_dialog()
        return True
