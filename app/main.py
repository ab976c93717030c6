"""
Streamlit Filter Editor

Lets a user compose a report filter: AND-ed groups of OR-ed conditions over
account, category, payee and free text. Shows the saved JSON form, a plain
English summary, review warnings and a live preview against sample
transactions.

Every button or widget change makes exactly one builder call; the editor
never edits the expression itself.
"""

from datetime import date
from decimal import Decimal

import streamlit as st

from report_filters.builder import (
    add_condition,
    add_group,
    remove_condition,
    remove_group,
    update_condition,
)
from report_filters.config import get_settings
from report_filters.evaluation import filter_transactions
from report_filters.log import configure_logging, get_logger
from report_filters.models import (
    FIELD_LABELS,
    AccountEntry,
    CategoryEntry,
    FilterExpression,
    FilterField,
    PayeeEntry,
    TransactionRecord,
    ValidationResult,
    is_entity_field,
)
from report_filters.serialization import ExpressionDecodeError, deserialize, serialize
from report_filters.services import (
    DirectoryError,
    InMemoryDirectory,
    OptionProvider,
)
from report_filters.validation import ExpressionValidator, describe_expression


# Page configuration
st.set_page_config(
    page_title="Report Filters",
    page_icon="🔎",
    layout="wide",
)

configure_logging()
logger = get_logger("report_filters.app")


# =============================================================================
# DEMO DATA
# =============================================================================

def demo_directory() -> InMemoryDirectory:
    return InMemoryDirectory(
        accounts=[
            AccountEntry(id="acc-chq", name="Chequing"),
            AccountEntry(id="acc-sav", name="Savings"),
            AccountEntry(id="acc-visa", name="Visa"),
        ],
        categories=[
            CategoryEntry(id="cat-food", name="Food"),
            CategoryEntry(id="cat-groc", name="Groceries", parent_id="cat-food"),
            CategoryEntry(id="cat-rest", name="Restaurants", parent_id="cat-food"),
            CategoryEntry(id="cat-home", name="Housing"),
            CategoryEntry(id="cat-rent", name="Rent", parent_id="cat-home"),
            CategoryEntry(id="cat-util", name="Utilities", parent_id="cat-home"),
            CategoryEntry(id="cat-sal", name="Salary"),
        ],
        payees=[
            PayeeEntry(id="pay-market", name="Corner Market"),
            PayeeEntry(id="pay-landlord", name="Landlord"),
            PayeeEntry(id="pay-hydro", name="City Hydro"),
            PayeeEntry(id="pay-bistro", name="Bistro 21"),
            PayeeEntry(id="pay-employer", name="Acme Corp"),
        ],
    )


def demo_transactions() -> list[TransactionRecord]:
    rows = [
        ("t1", date(2024, 3, 1), "-1500.00", "acc-chq", "cat-rent", "pay-landlord", "Landlord", "March rent", None, False),
        ("t2", date(2024, 3, 2), "-82.40", "acc-visa", "cat-groc", "pay-market", "Corner Market", "Weekly shop", None, False),
        ("t3", date(2024, 3, 4), "-46.10", "acc-visa", "cat-rest", "pay-bistro", "Bistro 21", "Dinner", "birthday", False),
        ("t4", date(2024, 3, 5), "-500.00", "acc-chq", None, None, None, "Transfer to savings", None, True),
        ("t5", date(2024, 3, 8), "-96.75", "acc-chq", "cat-util", "pay-hydro", "City Hydro", "Electricity bill", None, False),
        ("t6", date(2024, 3, 15), "3200.00", "acc-chq", "cat-sal", "pay-employer", "Acme Corp", "Payroll", None, False),
        ("t7", date(2024, 3, 18), "-12.00", "acc-visa", None, None, "Parking kiosk", "Parking", None, False),
    ]
    return [
        TransactionRecord(
            id=tid,
            transaction_date=when,
            amount=Decimal(amount),
            account_id=account_id,
            category_id=category_id,
            payee_id=payee_id,
            payee_name=payee_name,
            description=description,
            memo=memo,
            is_transfer=is_transfer,
        )
        for tid, when, amount, account_id, category_id, payee_id, payee_name, description, memo, is_transfer in rows
    ]


@st.cache_resource
def get_option_provider() -> OptionProvider:
    settings = get_settings()
    directory = demo_directory()
    if settings.directory_file:
        try:
            directory = InMemoryDirectory.from_file(settings.directory_file)
        except DirectoryError as e:
            logger.warning("directory_fallback_to_demo", error=str(e))
    return OptionProvider(directory, settings)


# =============================================================================
# STATE
# =============================================================================

def init_state() -> None:
    if "expression" not in st.session_state:
        st.session_state.expression = FilterExpression()
    # Bumped on every edit so index-keyed widgets are rebuilt from the
    # new expression instead of keeping stale values.
    if "revision" not in st.session_state:
        st.session_state.revision = 0


def set_expression(expr: FilterExpression) -> None:
    st.session_state.expression = expr
    st.session_state.revision += 1


def apply(operation, *args) -> None:
    set_expression(operation(st.session_state.expression, *args))


def widget_key(name: str, *indexes: int) -> str:
    return "-".join([name, str(st.session_state.revision), *map(str, indexes)])


def on_field_change(gi: int, ci: int, key: str) -> None:
    apply(update_condition, gi, ci, {"field": st.session_state[key]})


def on_values_change(gi: int, ci: int, key: str) -> None:
    apply(update_condition, gi, ci, {"value": list(st.session_state[key])})


def on_text_change(gi: int, ci: int, key: str) -> None:
    apply(update_condition, gi, ci, {"value": st.session_state[key]})


# =============================================================================
# RENDERING
# =============================================================================

def render_condition(
    gi: int,
    ci: int,
    condition,
    label_maps: dict[str, dict[str, str]],
    review: ValidationResult,
) -> None:
    field_col, value_col, remove_col = st.columns([2, 6, 1])

    with field_col:
        key = widget_key("field", gi, ci)
        fields = [f.value for f in FilterField]
        st.selectbox(
            "Field",
            fields,
            index=fields.index(condition.field),
            format_func=FIELD_LABELS.get,
            key=key,
            on_change=on_field_change,
            args=(gi, ci, key),
            label_visibility="collapsed",
        )

    with value_col:
        if is_entity_field(condition.field):
            labels = label_maps[condition.field]
            choices = list(labels) + [v for v in condition.value if v not in labels]
            key = widget_key("values", gi, ci)
            st.multiselect(
                "Values",
                choices,
                default=list(condition.value),
                format_func=lambda v, labels=labels: labels.get(v, v),
                key=key,
                on_change=on_values_change,
                args=(gi, ci, key),
                placeholder=f"Select {FIELD_LABELS[condition.field]}...",
                label_visibility="collapsed",
            )
        else:
            key = widget_key("text", gi, ci)
            st.text_input(
                "Text",
                value=condition.value,
                key=key,
                on_change=on_text_change,
                args=(gi, ci, key),
                placeholder="Search text...",
                label_visibility="collapsed",
            )
        for issue in review.issues_for(gi, ci):
            st.caption(f"⚠️ {issue.message}")

    with remove_col:
        st.button(
            "✕",
            key=widget_key("remove-condition", gi, ci),
            help="Remove condition",
            on_click=apply,
            args=(remove_condition, gi, ci),
        )


def render_editor(label_maps: dict[str, dict[str, str]], review: ValidationResult) -> None:
    expr: FilterExpression = st.session_state.expression

    if expr.is_empty:
        st.info("No filters, all transactions included")
        st.button("➕ Add filter group", on_click=apply, args=(add_group,))
        return

    for gi, group in enumerate(expr):
        if gi > 0:
            st.markdown("<center><b>AND</b></center>", unsafe_allow_html=True)

        with st.container(border=True):
            title_col, remove_col = st.columns([8, 1])
            title_col.caption("MATCH ANY")
            remove_col.button(
                "✕",
                key=widget_key("remove-group", gi),
                help="Remove group",
                on_click=apply,
                args=(remove_group, gi),
            )

            for ci, condition in enumerate(group.conditions):
                if ci > 0:
                    st.caption("OR")
                render_condition(gi, ci, condition, label_maps, review)

            st.button(
                "➕ Add OR condition",
                key=widget_key("add-condition", gi),
                on_click=apply,
                args=(add_condition, gi),
            )

    st.button("➕ Add AND group", on_click=apply, args=(add_group,))


def render_sidebar() -> None:
    st.sidebar.title("🔎 Report Filters")
    st.sidebar.markdown("---")
    st.sidebar.markdown("### Load saved filter")

    raw = st.sidebar.text_area("Filter JSON", value="[]", height=150)
    if st.sidebar.button("Load"):
        try:
            set_expression(deserialize(raw))
            st.sidebar.success("Filter loaded")
        except ExpressionDecodeError as e:
            st.sidebar.error(f"❌ {e}")

    if st.sidebar.button("Clear all filters"):
        set_expression(FilterExpression())


def main():
    init_state()
    render_sidebar()

    provider = get_option_provider()
    try:
        options = provider.all_options()
        label_maps = provider.label_map()
    except DirectoryError as e:
        st.error(f"❌ Could not load accounts, categories and payees: {e}")
        return

    validator = ExpressionValidator(options)
    review = validator.validate(st.session_state.expression)

    st.title("Filter builder")
    render_editor(label_maps, review)

    expr: FilterExpression = st.session_state.expression
    st.markdown("---")

    summary = describe_expression(
        expr,
        label_for=lambda field, value: label_maps.get(field, {}).get(value, value),
    )
    st.markdown(f"**Matches:** {summary}")
    st.caption(f"{expr.condition_count} condition(s) in {len(expr)} group(s)")

    if review.issues:
        st.warning(validator.get_user_friendly_summary(review))

    with st.expander("Saved form (JSON)"):
        st.code(serialize(expr), language="json")

    st.markdown("### Preview")
    matched = filter_transactions(expr, demo_transactions())
    st.caption(f"{len(matched)} matching transaction(s)")
    st.dataframe(
        [
            {
                "Date": t.transaction_date,
                "Payee": t.payee_name or "",
                "Description": t.description or "",
                "Amount": float(t.amount) if t.amount is not None else None,
                "Transfer": t.is_transfer,
            }
            for t in matched
        ],
        use_container_width=True,
    )


if __name__ == "__main__":
    main()
