"""Best-effort recovery of which account or card an SMS refers to."""

import logging
import re
from typing import Optional, Tuple

from .models import AccountIdentity
from .models.transaction_models import UNKNOWN_ISSUER


logger = logging.getLogger(__name__)


# Ordered (needle, display name) pairs. The first needle found in the message
# wins, so more specific names sit above the short forms they contain.
KNOWN_ISSUERS: Tuple[Tuple[str, str], ...] = (
    ("hdfc", "HDFC Bank"),
    ("icici", "ICICI Bank"),
    ("idfc first", "IDFC FIRST Bank"),
    ("idfc", "IDFC FIRST Bank"),
    ("axis", "Axis Bank"),
    ("state bank of india", "State Bank of India"),
    ("sbi", "State Bank of India"),
    ("kotak", "Kotak Mahindra Bank"),
    ("yes bank", "Yes Bank"),
    ("punjab national bank", "Punjab National Bank"),
    ("pnb", "Punjab National Bank"),
    ("bank of baroda", "Bank of Baroda"),
    ("indusind", "IndusInd Bank"),
    ("union bank", "Union Bank of India"),
    ("federal bank", "Federal Bank"),
)

_ISSUER_LOOKUP = tuple(
    (re.compile(r"\b" + re.escape(needle) + r"\b", re.IGNORECASE), name)
    for needle, name in KNOWN_ISSUERS
)

# Words that can sit in front of a bank name without being part of it.
_LEADING_NOISE = {
    "alert", "credited", "customer", "dear", "debited", "from", "in", "of",
    "on", "our", "payment", "received", "sent", "the", "to", "your",
}

# Capitalised words ending in "Bank", matched case-sensitively inside the
# otherwise case-insensitive patterns below.
_ISSUER = r"(?-i:(?P<issuer>(?:[A-Z][A-Za-z&]*[ \t]+){0,3}(?:Bank|BANK)))"

SAVINGS_PATTERN = re.compile(
    r"(?:" + _ISSUER + r"\s+)?"
    r"\b(?:a/c|acct\.?|account)(?:\s*no\.?)?\s*[:\-]?\s*"
    r"[x*]{0,12}\d{0,14}?(?P<digits>\d{4})(?!\d)",
    re.IGNORECASE | re.DOTALL | re.ASCII,
)

CREDIT_CARD_PATTERN = re.compile(
    r"(?:" + _ISSUER + r"\s+)?"
    r"(?:credit\s+)?\bcard(?:member)?\b.{0,40}?"
    r"\bending\s+(?:(?:with|in)\s+)?[x*]{0,12}(?P<digits>\d{4})(?!\d)",
    re.IGNORECASE | re.DOTALL | re.ASCII,
)

_PATTERNS = (
    (SAVINGS_PATTERN, "savings"),
    (CREDIT_CARD_PATTERN, "credit_card"),
)


def _clean_issuer(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    words = raw.split()
    while words and words[0].lower() in _LEADING_NOISE:
        words.pop(0)
    # Nothing but "Bank" left is not a name.
    if len(words) < 2:
        return None
    return " ".join(words)


def lookup_issuer(body: str) -> str:
    """Return the first known issuer mentioned in ``body``, or ``"Unknown Bank"``."""

    for needle, name in _ISSUER_LOOKUP:
        if needle.search(body):
            return name
    return UNKNOWN_ISSUER


def extract_account_identity(body) -> Optional[AccountIdentity]:
    """Recover ``(last four digits, issuer, kind)`` from an SMS body.

    The savings-account pattern is tried before the credit-card pattern.
    Returns ``None`` when neither matches, which is normal for messages that
    do not mention an account.
    """

    if not isinstance(body, str) or not body.strip():
        return None

    for pattern, kind in _PATTERNS:
        match = pattern.search(body)
        if not match:
            continue
        issuer = _clean_issuer(match.group("issuer")) or lookup_issuer(body)
        identity = AccountIdentity(
            last_four_digits=match.group("digits"),
            issuer_name=issuer,
            kind=kind,
        )
        logger.debug("[Account] %s account ending %s (%s)", kind, identity.last_four_digits, issuer)
        return identity

    return None
