from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


Direction = Literal["income", "expense"]
Category = Literal["UPI Payment", "Credit Card", "Auto-debit", "Income"]
AccountKind = Literal["savings", "credit_card"]

SOURCE_TAG = "SMS"
UNKNOWN_ISSUER = "Unknown Bank"


class RawMessage(BaseModel):
    """One SMS as handed over by the device inbox reader."""

    provider_id: str = Field(..., description="Message id assigned by the SMS provider")
    sender: str = Field(default="", description="Sender address, e.g. VM-HDFCBK")
    received_at: datetime
    body: str

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "provider_id": "1842",
                "sender": "VM-HDFCBK",
                "received_at": "2025-11-18T10:42:00",
                "body": "Sent Rs.299.00 from HDFC Bank A/c 1263 To Google Play 18/11/25",
            }
        }


class AccountIdentity(BaseModel):
    """Partial account identity used to route a transaction to an account.

    Never unique on its own; callers reconcile it against stored accounts
    by ``(last_four_digits, kind)``.
    """

    last_four_digits: str = Field(..., pattern=r"^[0-9]{4}$")
    issuer_name: str = Field(default=UNKNOWN_ISSUER, min_length=1)
    kind: AccountKind


class ParsedTransaction(BaseModel):
    amount: Decimal = Field(..., ge=0)
    direction: Direction
    occurred_at: date
    counterparty: str
    category: Category
    account_hint: Optional[AccountIdentity] = None
    source_tag: Literal["SMS"] = SOURCE_TAG
    dialect: str = Field(..., description="Name of the SMS dialect that matched")

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "867.00",
                "direction": "expense",
                "occurred_at": "2025-10-31",
                "counterparty": "ZOMATO",
                "category": "Credit Card",
                "account_hint": {
                    "last_four_digits": "1142",
                    "issuer_name": "IDFC FIRST Bank",
                    "kind": "credit_card",
                },
                "source_tag": "SMS",
                "dialect": "card_spend",
            }
        }


class ImportCandidate(ParsedTransaction):
    """A parsed transaction still tied to the message it came from.

    The storage side dedupes on ``provider_id`` before writing.
    """

    provider_id: str
    sender: str = ""
    received_at: datetime


class ParseMessageRequest(BaseModel):
    raw_message: str = Field(..., description="Raw SMS/notification text")


class ParseMessageResponse(BaseModel):
    matched: bool
    transaction: Optional[ParsedTransaction] = None


class ParseBatchRequest(BaseModel):
    messages: List[str] = Field(default_factory=list)


class ImportCandidatesRequest(BaseModel):
    messages: List[RawMessage] = Field(default_factory=list)


class DialectInfo(BaseModel):
    name: str
    category: Category
    direction: Direction
