import logging
from typing import List, Optional

from fastapi import APIRouter

from ..account_identity import extract_account_identity
from ..models import (
    AccountIdentity,
    DialectInfo,
    ImportCandidate,
    ImportCandidatesRequest,
    ParseBatchRequest,
    ParseMessageRequest,
    ParseMessageResponse,
    ParsedTransaction,
)
from ..sms_parser import DIALECTS, extract, extract_batch, prepare_import


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.get("/dialects", response_model=List[DialectInfo])
async def list_dialects() -> List[DialectInfo]:
    """SMS dialects in the order they are tried."""

    return [
        DialectInfo(name=d.name, category=d.category, direction=d.direction)
        for d in DIALECTS
    ]


@router.post("/parse_message", response_model=ParseMessageResponse)
async def parse_message(payload: ParseMessageRequest) -> ParseMessageResponse:
    transaction = extract(payload.raw_message)
    if transaction is None:
        return ParseMessageResponse(matched=False)
    return ParseMessageResponse(matched=True, transaction=transaction)


@router.post("/parse_batch", response_model=List[ParsedTransaction])
async def parse_batch(payload: ParseBatchRequest) -> List[ParsedTransaction]:
    """Parse several SMS bodies; unrecognised messages are left out."""

    transactions = extract_batch(payload.messages)
    logger.info("[API] parse_batch: %d of %d messages parsed", len(transactions), len(payload.messages))
    return transactions


@router.post("/account_identity", response_model=Optional[AccountIdentity])
async def account_identity(payload: ParseMessageRequest) -> Optional[AccountIdentity]:
    return extract_account_identity(payload.raw_message)


@router.post("/import_candidates", response_model=List[ImportCandidate])
async def import_candidates(payload: ImportCandidatesRequest) -> List[ImportCandidate]:
    """Parse device messages for review before import.

    Each result keeps the message's provider id so the storage side can
    skip messages it has already imported.
    """

    return prepare_import(payload.messages)
