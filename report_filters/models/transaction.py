"""
Transaction Records

The evaluator only needs a handful of transaction attributes. This model
holds exactly those, plus the date and amount the editor preview displays.
It accepts the API's camelCase keys (``accountId``, ``isTransfer``) as well
as snake_case, and ignores anything else in the payload.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TransactionSplit(BaseModel):
    """One line of a split transaction."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    category_id: Optional[str] = None
    amount: Optional[Decimal] = None
    memo: Optional[str] = None


class TransactionRecord(BaseModel):
    """
    A transaction as seen by the filter evaluator.

    A split transaction usually has no ``category_id`` of its own; its
    categories live on the split lines.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: Optional[str] = Field(
        default=None,
        description="Transaction identifier"
    )
    account_id: Optional[str] = None
    category_id: Optional[str] = None
    payee_id: Optional[str] = None
    payee_name: Optional[str] = Field(
        default=None,
        description="Payee name as recorded on the transaction"
    )
    description: Optional[str] = None
    memo: Optional[str] = Field(
        default=None,
        description="Free-form note text"
    )
    is_transfer: bool = False
    transaction_date: Optional[date] = None
    amount: Optional[Decimal] = None
    splits: list[TransactionSplit] = Field(default_factory=list)

    @property
    def category_ids(self) -> list[str]:
        """Own category followed by split categories, without gaps."""
        ids = [self.category_id] if self.category_id else []
        ids.extend(split.category_id for split in self.splits if split.category_id)
        return ids

    @property
    def has_category(self) -> bool:
        return bool(self.category_ids)
