"""
Filter Expression Models

An expression is what the filter builder edits and what a saved custom
report stores as its selection criterion:

    Expression := Group[]            groups are AND-ed
    Group      := {conditions: []}   conditions are OR-ed
    Condition  := {field, value}

The value's shape follows the field. Entity fields (account, category,
payee) carry an insertion-ordered set of identifiers; the text field carries
a single search string. Conditions are a discriminated union so that a
value of the wrong shape cannot be represented.

All models are frozen. Editing happens through ``report_filters.builder``,
which always returns a new expression.
"""

from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    RootModel,
    Tag,
    field_validator,
)


# =============================================================================
# FIELD CATALOG
# =============================================================================

class FilterField(str, Enum):
    """Filterable transaction fields, in the order the field picker shows them."""
    ACCOUNT = "account"
    CATEGORY = "category"
    PAYEE = "payee"
    TEXT = "text"


class CategorySpecialValue(str, Enum):
    """
    Pseudo-categories offered next to the real ones.

    They have no directory entry; the evaluator recognizes them itself.
    """
    UNCATEGORIZED = "uncategorized"  # transaction has no category
    TRANSFER = "transfer"            # transaction is a transfer


UNCATEGORIZED = CategorySpecialValue.UNCATEGORIZED.value
TRANSFER = CategorySpecialValue.TRANSFER.value

ENTITY_FIELDS: tuple[FilterField, ...] = (
    FilterField.ACCOUNT,
    FilterField.CATEGORY,
    FilterField.PAYEE,
)

FIELD_LABELS: dict[str, str] = {
    FilterField.ACCOUNT.value: "Account",
    FilterField.CATEGORY.value: "Category",
    FilterField.PAYEE.value: "Payee",
    FilterField.TEXT.value: "Text",
}

EntityFieldName = Literal["account", "category", "payee"]
FieldName = Literal["account", "category", "payee", "text"]


def _field_name(field: Any) -> Any:
    """Plain string for a FilterField member, anything else untouched."""
    if isinstance(field, FilterField):
        return field.value
    return field


def is_entity_field(field: Union[FilterField, str]) -> bool:
    """True for account, category and payee."""
    return _field_name(field) in tuple(f.value for f in ENTITY_FIELDS)


def empty_value_for(field: Union[FilterField, str]) -> Union[tuple[str, ...], str]:
    """The empty default value for a field's kind."""
    return () if is_entity_field(field) else ""


# =============================================================================
# CONDITIONS
# =============================================================================

class EntityCondition(BaseModel):
    """
    Membership test against a set of directory identifiers.

    ``value`` is a set with insertion order kept for display: duplicates are
    dropped, first occurrence wins. An empty set never matches.
    """
    model_config = ConfigDict(frozen=True)

    field: EntityFieldName = Field(
        ...,
        description="Entity field the identifiers refer to"
    )
    value: tuple[str, ...] = Field(
        default=(),
        description="Selected identifiers"
    )

    @field_validator('field', mode='before')
    @classmethod
    def coerce_field(cls, v: Any) -> Any:
        return _field_name(v)

    @field_validator('value')
    @classmethod
    def dedupe_value(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Keep set semantics without losing selection order."""
        return tuple(dict.fromkeys(v))


class TextCondition(BaseModel):
    """Case-insensitive substring test against a transaction's searchable text."""
    model_config = ConfigDict(frozen=True)

    field: Literal["text"] = Field(
        default="text",
        description="Always 'text'"
    )
    value: str = Field(
        default="",
        description="Search string as typed by the user"
    )

    @field_validator('field', mode='before')
    @classmethod
    def coerce_field(cls, v: Any) -> Any:
        return _field_name(v)


def _condition_tag(v: Any) -> str:
    if isinstance(v, dict):
        field = v.get("field")
    else:
        field = getattr(v, "field", None)
    return "text" if _field_name(field) == FilterField.TEXT.value else "entity"


Condition = Annotated[
    Union[
        Annotated[EntityCondition, Tag("entity")],
        Annotated[TextCondition, Tag("text")],
    ],
    Discriminator(_condition_tag),
]


def condition_for(
    field: Union[FilterField, str],
    value: Optional[Union[list[str], tuple[str, ...], str]] = None,
) -> Union[EntityCondition, TextCondition]:
    """
    Build the condition variant for ``field``.

    A missing value becomes the empty default for the field's kind.
    Raises pydantic.ValidationError if ``value`` has the wrong shape.
    """
    if value is None:
        value = empty_value_for(field)
    if is_entity_field(field):
        return EntityCondition(field=_field_name(field), value=value)
    return TextCondition(field=_field_name(field), value=value)


def default_condition() -> EntityCondition:
    """The condition every new group and every "Add OR condition" starts with."""
    return EntityCondition(field=FilterField.CATEGORY.value, value=())


# =============================================================================
# GROUPS AND EXPRESSIONS
# =============================================================================

class FilterGroup(BaseModel):
    """
    OR-combined conditions ("Match any").

    A group always has at least one condition; the builder drops a group
    together with its last condition.
    """
    model_config = ConfigDict(frozen=True)

    conditions: tuple[Condition, ...] = Field(
        ...,
        min_length=1,
        description="Conditions, any of which satisfies the group"
    )


class FilterExpression(RootModel[tuple[FilterGroup, ...]]):
    """
    AND-combined groups.

    The empty expression means "no filters" and matches every transaction.
    """
    model_config = ConfigDict(frozen=True)

    root: tuple[FilterGroup, ...] = ()

    def __iter__(self) -> Iterator[FilterGroup]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> FilterGroup:
        return self.root[index]

    @property
    def groups(self) -> tuple[FilterGroup, ...]:
        return self.root

    @property
    def is_empty(self) -> bool:
        return not self.root

    @property
    def condition_count(self) -> int:
        return sum(len(group.conditions) for group in self.root)


# =============================================================================
# BUILDER INPUT
# =============================================================================

class ConditionPatch(BaseModel):
    """
    Partial update for one condition, as emitted by the editor.

    Only keys that were actually supplied take part in the update, so
    ``ConditionPatch(field="payee")`` carries no value at all.
    """
    model_config = ConfigDict(frozen=True)

    field: Optional[FieldName] = None
    value: Optional[Union[tuple[str, ...], str]] = None

    @field_validator('field', mode='before')
    @classmethod
    def coerce_field(cls, v: Any) -> Any:
        return _field_name(v)

    @property
    def has_field(self) -> bool:
        return "field" in self.model_fields_set and self.field is not None

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set and self.value is not None
