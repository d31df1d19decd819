import logging
from typing import Any, Dict, List

from constants.schemas import SupplyItem
from constants.supply_types import MEDICAL_SUPPLIES_TABLE
from utils.supabase_handler import SupabaseHandler

logger = logging.getLogger(__name__)


class ItemRepository:
    """Reads and writes medical supply records. Errors propagate as SupabaseError."""

    def __init__(self, handler: SupabaseHandler, table: str = MEDICAL_SUPPLIES_TABLE):
        self.handler = handler
        self.table = table

    def fetch_all(self) -> List[SupplyItem]:
        rows = self.handler.select_all(self.table)
        logger.info(f"Fetched {len(rows)} rows from {self.table}")
        return [SupplyItem.from_record(row) for row in rows]

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self.handler.insert(self.table, record)

    def update(self, item_id: str, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        return self.handler.update(self.table, item_id, record)
