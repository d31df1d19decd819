# constants/supply_types.py

MEDICAL_SUPPLIES_TABLE = "medical_supplies"

PLACEHOLDER_IMAGE = "/logo.png"

# Fallback shown for rows that were saved without an expiration date
DEFAULT_EXPIRES_ON = "2025-12-31"

SUPPLY_TYPES = [
    "PPE",
    "Airway and Oxygen",
    "Catheters and IV Supplies",
    "Needles and Syringes",
    "Wound Care",
    "Surgical",
    "Diagnostic",
    "Emergency",
    "Other",
]

# The type filter only offers the categories stocked most often
TYPE_FILTER_OPTIONS = [
    "all",
    "Airway and Oxygen",
    "Catheters and IV Supplies",
    "PPE",
    "Needles and Syringes",
    "Wound Care",
]

EXPIRED_FILTER_OPTIONS = {
    "all": "All",
    "expired": "Expired",
    "not-expired": "Not expired",
}
