import pytest
from pydantic import ValidationError

from ..account_identity import extract_account_identity, lookup_issuer
from ..models import AccountIdentity
from ..sms_parser import extract


def test_savings_account_with_inline_issuer():
    identity = extract_account_identity("Sent Rs.299.00 from HDFC Bank A/c 1263 To Google Play 18/11/25")

    assert identity.last_four_digits == "1263"
    assert identity.issuer_name == "HDFC Bank"
    assert identity.kind == "savings"


def test_credit_card_with_inline_issuer():
    identity = extract_account_identity(
        "INR 867.00 spent on your IDFC FIRST Bank Credit Card ending XX1142 at ZOMATO"
    )

    assert identity.last_four_digits == "1142"
    assert identity.issuer_name == "IDFC FIRST Bank"
    assert identity.kind == "credit_card"


def test_identity_without_a_transaction():
    message = "Your HDFC Bank A/c XX1263 KYC update is pending. Visit the nearest branch."

    assert extract(message) is None

    identity = extract_account_identity(message)
    assert identity.last_four_digits == "1263"
    assert identity.issuer_name == "HDFC Bank"
    assert identity.kind == "savings"


def test_masked_account_marker():
    identity = extract_account_identity("Your A/C *4821 has been debited")

    assert identity.last_four_digits == "4821"


def test_long_account_number_keeps_last_four():
    identity = extract_account_identity("Amount credited to Account No. 50100012341263 today")

    assert identity.last_four_digits == "1263"
    assert identity.kind == "savings"


def test_issuer_found_elsewhere_in_message():
    identity = extract_account_identity("ICICI: your card ending 7788 was used for Rs 250")

    assert identity.kind == "credit_card"
    assert identity.last_four_digits == "7788"
    assert identity.issuer_name == "ICICI Bank"


def test_unknown_issuer_placeholder():
    identity = extract_account_identity("Your card ending 4321 was used at a merchant")

    assert identity.issuer_name == "Unknown Bank"


def test_savings_pattern_wins_over_card_pattern():
    identity = extract_account_identity(
        "Rs.5,000 debited from A/c XX1263 towards your Credit Card ending 1142"
    )

    assert identity.kind == "savings"
    assert identity.last_four_digits == "1263"


def test_no_identity():
    assert extract_account_identity("Your package has shipped and will arrive Tuesday") is None
    assert extract_account_identity("Rs.499.00 has been deducted towards NETFLIX.") is None


def test_non_text_input():
    assert extract_account_identity(None) is None
    assert extract_account_identity("") is None
    assert extract_account_identity(1263) is None


def test_lookup_issuer_order():
    assert lookup_issuer("Payment via IDFC FIRST netbanking") == "IDFC FIRST Bank"
    assert lookup_issuer("SBI UPI ref 1234") == "State Bank of India"
    assert lookup_issuer("nothing to see") == "Unknown Bank"


def test_non_ascii_account_digits_are_ignored():
    assert extract_account_identity("Your A/c १२३४ is active") is None
    assert extract_account_identity("Your Credit Card ending ١٢٣٤ was used") is None


def test_account_identity_rejects_non_ascii_digits():
    with pytest.raises(ValidationError):
        AccountIdentity(last_four_digits="१२३४", kind="savings")
