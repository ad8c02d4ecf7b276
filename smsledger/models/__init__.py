from .transaction_models import (
    AccountIdentity,
    DialectInfo,
    ImportCandidate,
    ImportCandidatesRequest,
    ParseBatchRequest,
    ParsedTransaction,
    ParseMessageRequest,
    ParseMessageResponse,
    RawMessage,
)
