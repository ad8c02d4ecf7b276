"""Transaction extraction from Indian bank and UPI SMS messages.

Each SMS dialect is a :class:`Dialect` record in ``DIALECTS``. ``extract``
walks that table in order and returns the first successful parse, so the
position of a dialect in the table is its precedence.

All patterns are case-insensitive with ``.`` matching newlines (several banks
split one message over multiple lines). Free-text spans are bounded so a
failed scan stays linear in the length of the message.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from .account_identity import extract_account_identity
from .amounts import MalformedAmountError, parse_amount
from .config import settings
from .dates import normalize_date
from .models import ImportCandidate, ParsedTransaction, RawMessage


logger = logging.getLogger(__name__)


_FLAGS = re.IGNORECASE | re.DOTALL | re.ASCII

CURRENCY = r"(?:\brs\.?|\binr|₹)\s*"
AMOUNT = r"(?P<amount>[\d,]{1,20}(?:\.\d{1,2})?)"
SHORT_DATE = r"(?P<date>\d{2}/\d{2}/\d{2})"
ANY_DATE = (
    r"(?P<date>\d{2}/\d{2}/\d{2}|\d{2}-[a-z]{3}-\d{2}|\d{2}-\d{2}-\d{2}"
    r"|\d{2}\s+[a-z]{3}\s+\d{4})(?!\d)"
)
# End of a free-text span: full stop before whitespace, a line break or the end.
SPAN_END = r"\s*(?:\.(?:\s|$)|\n|$)"


@dataclass(frozen=True)
class Dialect:
    """One SMS template: how to recognise it and what it means."""

    name: str
    patterns: Tuple[re.Pattern, ...]
    category: str
    direction: str
    # At least one cue must occur (lower-cased) before any pattern is tried.
    cues: Tuple[str, ...] = ()
    # Used when the template's counterparty span is optional and missing.
    default_counterparty: Optional[str] = None

    def recognize(self, body: str) -> Optional[re.Match]:
        if self.cues:
            lowered = body.lower()
            if not any(cue in lowered for cue in self.cues):
                return None
        for pattern in self.patterns:
            match = pattern.search(body)
            if match:
                return match
        return None

    def parse(
        self,
        body: str,
        fallback_date: Optional[date] = None,
    ) -> Optional[ParsedTransaction]:
        """Build a transaction from ``body`` or return ``None``.

        Raises MalformedAmountError when the template matched but the
        amount token is not a decimal.
        """

        match = self.recognize(body)
        if match is None:
            return None

        groups = match.groupdict()
        amount = parse_amount(groups["amount"])
        counterparty = _clean_counterparty(
            groups.get("counterparty"),
            settings.counterparty_max_length,
        ) or self.default_counterparty
        if not counterparty:
            return None

        return ParsedTransaction(
            amount=amount,
            direction=self.direction,
            occurred_at=normalize_date(groups.get("date"), fallback_date),
            counterparty=counterparty,
            category=self.category,
            account_hint=extract_account_identity(body),
            dialect=self.name,
        )


def _clean_counterparty(span: Optional[str], max_length: int) -> str:
    if not span:
        return ""
    # A trailing full stop ends the sentence, not the name.
    text = " ".join(span.split()).rstrip(".")
    return text[:max_length].rstrip()


DIALECTS: Tuple[Dialect, ...] = (
    # Sent Rs.299.00 from HDFC Bank A/c 1263 To Google Play 18/11/25
    Dialect(
        name="upi_debit",
        patterns=(
            re.compile(
                r"\bsent\s+" + CURRENCY + AMOUNT + r"\s+from\b.{0,80}?"
                r"\bto\s+(?P<counterparty>.{1,80}?)\s+(?:on\s+)?" + SHORT_DATE + r"(?!\d)",
                _FLAGS,
            ),
        ),
        category="UPI Payment",
        direction="expense",
        cues=("sent",),
    ),
    # Rs.500.00 credited to HDFC Bank A/c XX1263 on 18-11-25 from VPA john@okicici (UPI 5322...)
    Dialect(
        name="upi_credit",
        patterns=(
            re.compile(
                CURRENCY + AMOUNT + r"\s+(?:has\s+been\s+|is\s+)?credited\s+(?:to|in)\b.{0,80}?"
                r"\bon\s+" + ANY_DATE + r"\s+(?:by|from)\s+(?:vpa\s+)?"
                r"(?P<counterparty>[^\n(]{1,60}?)\s*(?:\(|\.(?:\s|$)|\n|$)",
                _FLAGS,
            ),
        ),
        category="Income",
        direction="income",
        cues=("upi", "vpa"),
    ),
    # Rs.150.00 has been reversed to your A/c XX1263 for failed UPI txn to SWIGGY.
    Dialect(
        name="upi_reversal",
        patterns=(
            re.compile(
                CURRENCY + AMOUNT + r"\s+(?:has\s+been\s+|is\s+|was\s+)?(?:reversed|refunded)\b"
                r"(?:.{0,80}?\btxn\s+(?:to|at)\s+(?P<counterparty>[^\n.]{1,50}?)" + SPAN_END + r")?",
                _FLAGS,
            ),
        ),
        category="UPI Payment",
        direction="income",
        cues=("upi",),
        default_counterparty="UPI Reversal",
    ),
    # Transaction Successful! INR 867.00 spent on your IDFC FIRST Bank Credit Card
    # ending XX1142 at ZOMATO on 31 OCT 2025
    Dialect(
        name="card_spend",
        patterns=(
            re.compile(
                r"(?:transaction\s+successful|delicious\s+purchase|happy\s+shopping)!.{0,80}?"
                + CURRENCY + AMOUNT + r"\s+spent\b.{0,120}?"
                r"\bat\s+(?P<counterparty>.{1,60}?)\s+on\s+(?P<date>\d{2}\s+[a-z]{3}\s+\d{4})",
                _FLAGS,
            ),
        ),
        category="Credit Card",
        direction="expense",
        cues=("spent",),
    ),
    # Payment of INR 5,000.00 received towards your IDFC FIRST Bank Credit Card
    # ending XX1142 on 05-NOV-25
    Dialect(
        name="card_bill_payment",
        patterns=(
            re.compile(
                r"\bpayment\s+of\s+" + CURRENCY + AMOUNT
                + r"\s+(?:has\s+been\s+|is\s+)?received\s+(?:towards|on|for)\s+(?:your\s+)?"
                r"(?P<counterparty>.{1,60}?card)\b"
                r"(?:.{0,30}?\bon\s+" + ANY_DATE + r")?",
                _FLAGS,
            ),
        ),
        category="Credit Card",
        direction="income",
        cues=("received",),
    ),
    # Rs.299.00 will be deducted on 15/11/25, 00:00:00 For GOOGLE INDIA DIGITAL SERVICES mandate ref ...
    Dialect(
        name="e_mandate",
        patterns=(
            re.compile(
                CURRENCY + AMOUNT + r"\s+will\s+be\s+deducted\b.{0,40}?"
                r"\bon\s+" + SHORT_DATE + r"(?!\d).{0,40}?"
                r"\bfor\s+(?P<counterparty>.{1,80}?)\s*\b(?:mandate|umn)\b",
                _FLAGS,
            ),
        ),
        category="Auto-debit",
        direction="expense",
        cues=("deducted",),
    ),
    # Rs.499.00 has been deducted from your account towards NETFLIX SUBSCRIPTION.
    Dialect(
        name="generic_debit",
        patterns=(
            re.compile(
                CURRENCY + AMOUNT + r"\s+(?:has\s+been\s+|is\s+|was\s+)?deducted\b.{0,80}?"
                r"\btowards\s+(?P<counterparty>.{1,60}?)" + SPAN_END,
                _FLAGS,
            ),
        ),
        category="Auto-debit",
        direction="expense",
        cues=("deducted",),
    ),
    # INR 45,000.00 credited to your A/c XX5678 on 01-11-25 by NEFT. Info: NEFT-...-ACME SALARY
    # Your A/c XX5678 has been credited with INR 45,000.00 on 01-Nov-25. Info: NEFT*...
    Dialect(
        name="neft_credit",
        patterns=(
            re.compile(
                CURRENCY + AMOUNT + r"\s+(?:has\s+been\s+|is\s+)?(?:credited|deposited)\b.{0,80}?"
                r"\bon\s+" + ANY_DATE + r"(?:.{0,60}?\binfo\b\s*[:\-]?|\s+by\b)"
                r"\s*(?P<counterparty>[^\n]{1,160})",
                _FLAGS,
            ),
            re.compile(
                r"\b(?:credited|deposited)\s+with\s+" + CURRENCY + AMOUNT + r".{0,40}?"
                r"\bon\s+" + ANY_DATE + r"(?:.{0,60}?\binfo\b\s*[:\-]?|\s+by\b)"
                r"\s*(?P<counterparty>[^\n]{1,160})",
                _FLAGS,
            ),
        ),
        category="Income",
        direction="income",
        cues=("neft", "salary"),
    ),
)


def dialect_names() -> Tuple[str, ...]:
    """Dialect names in precedence order."""
    return tuple(dialect.name for dialect in DIALECTS)


def extract(body, fallback_date: Optional[date] = None) -> Optional[ParsedTransaction]:
    """Parse one SMS body into a transaction.

    Returns ``None`` (no match) for non-text or empty input and for messages
    no dialect recognises. Never raises for bad message content.
    ``fallback_date`` replaces today's date for dialects without a date.
    """

    if not isinstance(body, str) or not body.strip():
        return None

    for dialect in DIALECTS:
        try:
            parsed = dialect.parse(body, fallback_date)
        except MalformedAmountError as exc:
            logger.debug("[Parser] %s matched with a bad amount, trying next: %s", dialect.name, exc)
            continue
        if parsed is not None:
            logger.debug("[Parser] matched %s: %s %s", dialect.name, parsed.amount, parsed.counterparty)
            return parsed

    logger.debug("[Parser] no dialect matched: %.40r", body)
    return None


def extract_batch(bodies) -> List[ParsedTransaction]:
    """Parse many SMS bodies, dropping non-matches and keeping input order."""

    if bodies is None or isinstance(bodies, (str, bytes)) or not isinstance(bodies, Iterable):
        return []

    parsed = [extract(body) for body in bodies]
    return [transaction for transaction in parsed if transaction is not None]


def extract_message(raw: RawMessage, date_fallback: Optional[str] = None) -> Optional[ImportCandidate]:
    """Parse a device message and keep its provider metadata.

    With ``date_fallback="received"`` (or ``SMSLEDGER_DATE_FALLBACK=received``)
    dialects without a date take the receipt date instead of today.
    """

    mode = date_fallback or settings.date_fallback
    fallback = raw.received_at.date() if mode == "received" else None

    parsed = extract(raw.body, fallback_date=fallback)
    if parsed is None:
        return None

    return ImportCandidate(
        **parsed.model_dump(),
        provider_id=raw.provider_id,
        sender=raw.sender,
        received_at=raw.received_at,
    )


def prepare_import(messages: Iterable[RawMessage], date_fallback: Optional[str] = None) -> List[ImportCandidate]:
    """Parse device messages for import review, newest transaction first."""

    candidates = []
    seen = 0
    for raw in messages:
        seen += 1
        candidate = extract_message(raw, date_fallback=date_fallback)
        if candidate is not None:
            candidates.append(candidate)

    candidates.sort(key=lambda candidate: candidate.occurred_at, reverse=True)
    logger.info("[Parser] %d of %d messages ready for import", len(candidates), seen)
    return candidates
