import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routers import transactions
from .sms_parser import dialect_names


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="SMS Ledger")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transactions.router, prefix="/api", tags=["transactions"])

logger.info("[startup] %d SMS dialects loaded: %s", len(dialect_names()), ", ".join(dialect_names()))


@app.get("/")
async def root():
    return {"message": "SMS Ledger parser is running"}
