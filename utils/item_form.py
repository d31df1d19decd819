"""
Item Form Module

Field definitions shared by the edit and create dialogs, and the coercion
rules that turn raw widget values into draft values. Nothing here rejects
input; required fields are checked when the item is saved.
"""

from datetime import date, datetime
from typing import Any, List, NamedTuple, Optional

from constants.schemas import SupplyItemDraft


class FormField(NamedTuple):
    name: str
    label: str
    kind: str  # text, textarea, int, float, date, select, checkbox
    required: bool = False
    step: Optional[float] = None


REQUIRED_SECTION = [
    FormField("name", "Name", "text", required=True),
    FormField("quantity", "Total Quantity", "int", required=True),
    FormField("type_of_supply", "Type of Supply", "select", required=True),
    FormField("expires_on", "Expiration Date", "date", required=True),
    FormField("is_expired", "Mark as Expired", "checkbox"),
]

BASIC_SECTION = [
    FormField("description", "Description", "textarea"),
    FormField("lot_number", "Lot Number", "text"),
    FormField("company", "Company", "text"),
    FormField("pallet_location", "Pallet Location", "text"),
]

PHYSICAL_SECTION = [
    FormField("cardboard_boxes_per_pallet", "Cardboard Boxes per Pallet", "int"),
    FormField("unit_boxes_per_cardboard", "Unit Boxes per Cardboard", "int"),
    FormField("units_per_box", "Units per Box", "int"),
    FormField("weight_per_cardboard_box", "Weight per Cardboard Box (kg)", "float", step=0.1),
    FormField("dimensions_cardboard_box", "Dimensions (cm)", "text"),
]

COST_SECTION = [
    FormField("cost_per_unit_box", "Cost per Unit Box ($)", "float", step=0.01),
    FormField("cost_per_cardboard_box", "Cost per Cardboard Box ($)", "float", step=0.01),
]

EXTRA_SECTION = [
    FormField("relevant_link", "Relevant Link", "text"),
    FormField("image_url", "Image URL", "text"),
    FormField("other_notes", "Other Notes", "textarea"),
]

FORM_SECTIONS = [
    ("Required Information", REQUIRED_SECTION),
    ("Basic Information", BASIC_SECTION),
    ("Physical Properties", PHYSICAL_SECTION),
    ("Cost Information", COST_SECTION),
    ("Additional Information", EXTRA_SECTION),
]

FORM_FIELDS: List[FormField] = [field for _, fields in FORM_SECTIONS for field in fields]

_FIELDS_BY_NAME = {field.name: field for field in FORM_FIELDS}


def parse_int(raw: Any) -> int:
    """Parse an integer, 0 when the text is not a number"""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return int(parse_float(raw))
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        pass
    # Accept "12.0" and "12abc" the way a browser number box would
    text = str(raw).strip()
    digits = ""
    for i, ch in enumerate(text):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def parse_float(raw: Any) -> float:
    """Parse a real number, 0.0 when the text is not a number"""
    try:
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            value = float(raw)
        else:
            value = float(str(raw).strip())
    except (TypeError, ValueError, OverflowError):
        return 0.0
    # nan and inf are not quantities
    if value != value or value in (float("inf"), float("-inf")):
        return 0.0
    return value


def coerce_checkbox(raw: Any) -> bool:
    return raw is True or raw == "true"


def coerce_input(kind: str, raw: Any) -> Any:
    # All numeric supply fields are counts, weights or costs
    if kind == "int":
        return max(0, parse_int(raw))
    if kind == "float":
        return max(0.0, parse_float(raw))
    if kind == "checkbox":
        return coerce_checkbox(raw)
    if kind == "date":
        if isinstance(raw, (date, datetime)):
            return raw.strftime("%Y-%m-%d")
        return "" if raw is None else str(raw)
    return "" if raw is None else str(raw)


def apply_input(draft: SupplyItemDraft, field_name: str, raw: Any) -> SupplyItemDraft:
    """Return a new draft with the coerced widget value assigned to field_name"""
    field = _FIELDS_BY_NAME[field_name]
    return draft.with_value(field_name, coerce_input(field.kind, raw))


def parse_date(value: Optional[str]) -> Optional[date]:
    """ISO date string to date for the date picker, None when unset or malformed"""
    if not value:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None
