import logging
from typing import Optional

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, DataReturnMode, GridOptionsBuilder, GridUpdateMode, JsCode

from constants.schemas import SupplyItem, SupplyItemDraft
from constants.supply_types import SUPPLY_TYPES
from utils.item_form import FORM_SECTIONS, FormField, apply_input, parse_date

logger = logging.getLogger(__name__)

STATUS_CELL_STYLE = JsCode(
    """
function(params) {
    if (params.value === "Expired") {
        return {color: "#b91c1c", backgroundColor: "#fef2f2"};
    }
    return {color: "#047857", backgroundColor: "#ecfdf5"};
}
"""
)


def navigate(path: str):
    """Move the browser session to another route"""
    st.query_params["path"] = path
    st.rerun()


def render_status_badge(is_expired: bool):
    if is_expired:
        st.markdown(":red-background[:red[Expired]]")
    else:
        st.markdown(":green-background[:green[Active]]")


def create_item_grid(df: pd.DataFrame, height=500, key=None) -> Optional[str]:
    """
    Show the item table with single-row selection.

    Args:
        df: Rows from items_to_dataframe, including the hidden id column
        height: Table height in pixels
        key: Widget key; change it to clear the selection

    Returns:
        Optional[str]: id of the selected item
    """
    try:
        gb = GridOptionsBuilder.from_dataframe(df)
        gb.configure_default_column(
            filterable=False,
            sortable=True,
            resizable=True,
            editable=False,
            minWidth=120,
        )
        gb.configure_selection("single", use_checkbox=False)
        gb.configure_column("id", hide=True)
        gb.configure_column("Name", width=220, pinned="left")
        gb.configure_column("Quantity", type=["numericColumn"], width=120)
        gb.configure_column(
            "Status",
            width=120,
            cellStyle=STATUS_CELL_STYLE,
        )
        grid_options = gb.build()

        grid_response = AgGrid(
            df,
            gridOptions=grid_options,
            height=height,
            data_return_mode=DataReturnMode.AS_INPUT,
            update_mode=GridUpdateMode.SELECTION_CHANGED,
            fit_columns_on_grid_load=True,
            theme="alpine",
            allow_unsafe_jscode=True,
            key=key,
        )
    except Exception as e:
        # Fall back to a plain table with a picker when the grid component fails
        logger.error(f"AgGrid failed to render: {e}")
        st.dataframe(df.drop(columns=["id"]), height=height, width="stretch", hide_index=True)
        names = {row["id"]: row["Name"] for row in df.to_dict("records")}
        picked = st.selectbox(
            "Open item",
            options=list(names),
            index=None,
            format_func=lambda item_id: names[item_id],
            key=f"{key}_fallback",
        )
        return picked

    selected = grid_response["selected_rows"]
    if selected is None:
        return None
    if isinstance(selected, pd.DataFrame):
        selected = selected.to_dict("records")
    if len(selected) == 0:
        return None
    return selected[0].get("id")


def render_item_details(item: SupplyItem):
    """Read-only view of every field of an item"""
    left, right = st.columns([1, 2])
    with left:
        if item.image_url.startswith(("http://", "https://")):
            st.image(item.image_url, width="stretch")
        else:
            st.caption("No image")
        render_status_badge(item.is_expired)
    with right:
        st.markdown(f"**Type of Supply:** {item.type_of_supply or '—'}")
        st.markdown(f"**Quantity:** {item.quantity}")
        st.markdown(f"**Expires On:** {item.expires_on}")
        st.markdown(f"**Lot Number:** {item.lot_number or '—'}")
        st.markdown(f"**Company:** {item.company or '—'}")
        st.markdown(f"**Pallet Location:** {item.pallet_location or '—'}")

    if item.description:
        st.markdown("**Description**")
        st.write(item.description)

    st.markdown("**Physical Properties**")
    physical_cols = st.columns(3)
    physical_cols[0].metric("Boxes per Pallet", item.cardboard_boxes_per_pallet)
    physical_cols[1].metric("Unit Boxes per Cardboard", item.unit_boxes_per_cardboard)
    physical_cols[2].metric("Units per Box", item.units_per_box)
    st.markdown(
        f"Weight per cardboard box: {item.weight_per_cardboard_box} kg · "
        f"Dimensions: {item.dimensions_cardboard_box or '—'} cm"
    )

    st.markdown("**Cost Information**")
    cost_cols = st.columns(2)
    cost_cols[0].metric("Cost per Unit Box", f"${item.cost_per_unit_box:,.2f}")
    cost_cols[1].metric("Cost per Cardboard Box", f"${item.cost_per_cardboard_box:,.2f}")

    if item.relevant_link:
        st.markdown(f"**Relevant Link:** [{item.relevant_link}]({item.relevant_link})")
    if item.other_notes:
        st.markdown("**Other Notes**")
        st.write(item.other_notes)


def _render_field(field: FormField, value, key: str):
    label = f"{field.label} *" if field.required else field.label
    if field.kind == "text":
        return st.text_input(label, value=value or "", key=key)
    if field.kind == "textarea":
        return st.text_area(label, value=value or "", height=90, key=key)
    if field.kind == "int":
        return st.number_input(label, min_value=0, step=1, value=int(value or 0), key=key)
    if field.kind == "float":
        return st.number_input(
            label, min_value=0.0, step=field.step or 0.1, value=float(value or 0), key=key
        )
    if field.kind == "date":
        return st.date_input(label, value=parse_date(value), format="YYYY-MM-DD", key=key)
    if field.kind == "select":
        index = SUPPLY_TYPES.index(value) if value in SUPPLY_TYPES else None
        return st.selectbox(
            label, options=SUPPLY_TYPES, index=index, placeholder="Select type", key=key
        )
    if field.kind == "checkbox":
        return st.checkbox(label, value=bool(value), key=key)
    raise ValueError(f"Unknown field kind: {field.kind}")


def render_item_form(draft: SupplyItemDraft, key_prefix: str) -> SupplyItemDraft:
    """
    Render the shared create/edit field set.

    Args:
        draft: Current values
        key_prefix: Prefix for widget keys; a new prefix starts from the draft values

    Returns:
        SupplyItemDraft: Draft updated from the widgets
    """
    left, right = st.columns(2)
    for index, (title, fields) in enumerate(FORM_SECTIONS):
        # Required and basic info on the left, the rest on the right
        with left if index < 2 else right:
            st.markdown(f"**{title}**")
            for field in fields:
                raw = _render_field(field, getattr(draft, field.name), f"{key_prefix}_{field.name}")
                draft = apply_input(draft, field.name, raw)
    return draft
