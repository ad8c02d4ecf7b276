from decimal import Decimal

from fastapi.testclient import TestClient

from ..main import app


client = TestClient(app)


def test_health_check():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_message_basic():
    payload = {
        "raw_message": "Transaction Successful! INR 867.00 spent on your IDFC FIRST Bank Credit Card "
                       "ending XX1142 at ZOMATO on 31 OCT 2025",
    }

    response = client.post("/api/parse_message", json=payload)
    assert response.status_code == 200

    data = response.json()

    assert data["matched"] is True
    transaction = data["transaction"]
    assert Decimal(str(transaction["amount"])) == Decimal("867.00")
    assert transaction["category"] == "Credit Card"
    assert transaction["counterparty"] == "ZOMATO"
    assert transaction["occurred_at"] == "2025-10-31"
    assert transaction["source_tag"] == "SMS"
    assert transaction["account_hint"] == {
        "last_four_digits": "1142",
        "issuer_name": "IDFC FIRST Bank",
        "kind": "credit_card",
    }


def test_parse_message_no_match():
    response = client.post("/api/parse_message", json={"raw_message": "Your package has shipped"})
    assert response.status_code == 200
    assert response.json() == {"matched": False, "transaction": None}


def test_parse_message_requires_text():
    response = client.post("/api/parse_message", json={})
    assert response.status_code == 422


def test_parse_batch_keeps_order():
    payload = {
        "messages": [
            "Sent Rs.299.00 from HDFC Bank A/c 1263 To Google Play 18/11/25",
            "Your package has shipped and will arrive Tuesday",
            "Rs.299.00 will be deducted on 15/11/25, 00:00:00 For GOOGLE INDIA DIGITAL SERVICES mandate ref ...",
        ]
    }

    response = client.post("/api/parse_batch", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert [t["category"] for t in data] == ["UPI Payment", "Auto-debit"]


def test_account_identity_endpoint():
    response = client.post(
        "/api/account_identity",
        json={"raw_message": "Your HDFC Bank A/c XX1263 KYC update is pending"},
    )
    assert response.status_code == 200
    assert response.json() == {"last_four_digits": "1263", "issuer_name": "HDFC Bank", "kind": "savings"}


def test_account_identity_endpoint_none():
    response = client.post("/api/account_identity", json={"raw_message": "hello"})
    assert response.status_code == 200
    assert response.json() is None


def test_import_candidates():
    payload = {
        "messages": [
            {"provider_id": "11", "sender": "VK-AXISBK", "received_at": "2025-11-15T00:05:00",
             "body": "Rs.299.00 will be deducted on 15/11/25, 00:00:00 For GOOGLE INDIA DIGITAL SERVICES mandate"},
            {"provider_id": "12", "sender": "VM-HDFCBK", "received_at": "2025-11-18T10:00:00",
             "body": "Sent Rs.299.00 from HDFC Bank A/c 1263 To Google Play 18/11/25"},
            {"provider_id": "13", "sender": "AMAZON", "received_at": "2025-11-18T11:00:00",
             "body": "Your package has shipped"},
        ]
    }

    response = client.post("/api/import_candidates", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert [c["provider_id"] for c in data] == ["12", "11"]
    assert data[0]["sender"] == "VM-HDFCBK"


def test_dialects_listed_in_order():
    response = client.get("/api/dialects")
    assert response.status_code == 200

    data = response.json()
    assert data[0] == {"name": "upi_debit", "category": "UPI Payment", "direction": "expense"}
    assert data[-1]["name"] == "neft_credit"
    assert len(data) == 8
