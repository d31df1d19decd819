from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from constants.supply_types import DEFAULT_EXPIRES_ON, PLACEHOLDER_IMAGE

# Backend column -> default used when the column is null or missing
FIELD_DEFAULTS: Dict[str, Any] = {
    "name": "",
    "description": "",
    "lot_number": "",
    "expires_on": "",
    "quantity": 0,
    "image_url": PLACEHOLDER_IMAGE,
    "is_expired": False,
    "type_of_supply": "",
    "pallet_location": "",
    "company": "",
    "cardboard_boxes_per_pallet": 0,
    "unit_boxes_per_cardboard": 0,
    "units_per_box": 0,
    "weight_per_cardboard_box": 0,
    "dimensions_cardboard_box": "",
    "cost_per_unit_box": 0,
    "cost_per_cardboard_box": 0,
    "relevant_link": "",
    "other_notes": "",
}

REQUIRED_FIELDS = ["name", "quantity", "type_of_supply", "expires_on"]


class SupplyItem(BaseModel):
    """One medical supply batch as stored in the medical_supplies table"""

    id: str
    name: str
    description: str = ""
    lot_number: str = Field(alias="lotNumber", default="")
    expires_on: str = Field(alias="expiresOn", default=DEFAULT_EXPIRES_ON)
    quantity: int = 0
    image_url: str = Field(alias="imageUrl", default=PLACEHOLDER_IMAGE)
    is_expired: bool = Field(alias="isExpired", default=False)
    type_of_supply: str = Field(alias="typeOfSupply", default="")
    pallet_location: str = Field(alias="palletLocation", default="")
    company: str = ""
    cardboard_boxes_per_pallet: int = Field(alias="cardboardBoxesPerPallet", default=0)
    unit_boxes_per_cardboard: int = Field(alias="unitBoxesPerCardboard", default=0)
    units_per_box: int = Field(alias="unitsPerBox", default=0)
    weight_per_cardboard_box: float = Field(alias="weightPerCardboardBox", default=0)
    dimensions_cardboard_box: str = Field(alias="dimensionsCardboardBox", default="")
    cost_per_unit_box: float = Field(alias="costPerUnitBox", default=0)
    cost_per_cardboard_box: float = Field(alias="costPerCardboardBox", default=0)
    relevant_link: str = Field(alias="relevantLink", default="")
    other_notes: str = Field(alias="otherNotes", default="")

    class Config:
        populate_by_name = True
        frozen = True

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SupplyItem":
        """
        Build an item from a backend row, replacing null columns with defaults.

        Args:
            record: Row as returned by the backend (snake_case columns)

        Returns:
            SupplyItem
        """
        data = {"id": str(record["id"])}
        for column, default in FIELD_DEFAULTS.items():
            value = record.get(column)
            if value is None or value == "":
                data[column] = default
                continue
            annotation = cls.model_fields[column].annotation
            if annotation is str and not isinstance(value, str):
                # e.g. numeric lot numbers stored in a text column
                value = str(value)
            elif annotation is int and isinstance(value, float):
                value = int(value)
            data[column] = value
        if not data["expires_on"]:
            data["expires_on"] = DEFAULT_EXPIRES_ON
        return cls(**data)

    @property
    def status_label(self) -> str:
        return "Expired" if self.is_expired else "Active"


class SupplyItemDraft(BaseModel):
    """Partial item being edited in the create/edit dialogs"""

    name: Optional[str] = None
    description: Optional[str] = None
    lot_number: Optional[str] = Field(alias="lotNumber", default=None)
    expires_on: Optional[str] = Field(alias="expiresOn", default=None)
    quantity: Optional[int] = None
    image_url: Optional[str] = Field(alias="imageUrl", default=None)
    is_expired: Optional[bool] = Field(alias="isExpired", default=None)
    type_of_supply: Optional[str] = Field(alias="typeOfSupply", default=None)
    pallet_location: Optional[str] = Field(alias="palletLocation", default=None)
    company: Optional[str] = None
    cardboard_boxes_per_pallet: Optional[int] = Field(alias="cardboardBoxesPerPallet", default=None)
    unit_boxes_per_cardboard: Optional[int] = Field(alias="unitBoxesPerCardboard", default=None)
    units_per_box: Optional[int] = Field(alias="unitsPerBox", default=None)
    weight_per_cardboard_box: Optional[float] = Field(alias="weightPerCardboardBox", default=None)
    dimensions_cardboard_box: Optional[str] = Field(alias="dimensionsCardboardBox", default=None)
    cost_per_unit_box: Optional[float] = Field(alias="costPerUnitBox", default=None)
    cost_per_cardboard_box: Optional[float] = Field(alias="costPerCardboardBox", default=None)
    relevant_link: Optional[str] = Field(alias="relevantLink", default=None)
    other_notes: Optional[str] = Field(alias="otherNotes", default=None)

    class Config:
        populate_by_name = True

    @classmethod
    def blank(cls) -> "SupplyItemDraft":
        """Draft seeded for the New Item dialog"""
        return cls(**FIELD_DEFAULTS)

    @classmethod
    def from_item(cls, item: SupplyItem) -> "SupplyItemDraft":
        return cls(**item.model_dump(exclude={"id"}))

    def with_value(self, field: str, value: Any) -> "SupplyItemDraft":
        if field not in FIELD_DEFAULTS:
            raise KeyError(f"Unknown supply item field: {field}")
        return self.model_copy(update={field: value})

    def missing_required(self) -> list:
        """Required fields that are empty, zero or unset"""
        return [field for field in REQUIRED_FIELDS if not getattr(self, field)]

    def to_record(self) -> Dict[str, Any]:
        """
        Merge the draft into a complete backend payload.

        Unset fields fall back to FIELD_DEFAULTS. The id is never part of the
        payload; the backend assigns it on insert.

        Returns:
            Dict[str, Any]: snake_case column -> value
        """
        values = self.model_dump()
        record = {}
        for column, default in FIELD_DEFAULTS.items():
            value = values.get(column)
            record[column] = value if value not in (None, "") else default
        # Required columns go through exactly as entered
        for column in ("name", "type_of_supply", "expires_on"):
            record[column] = values.get(column)
        return record
