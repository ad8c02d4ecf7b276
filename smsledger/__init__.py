from .account_identity import extract_account_identity
from .sms_parser import (
    dialect_names,
    extract,
    extract_batch,
    extract_message,
    prepare_import,
)
