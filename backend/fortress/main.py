import logging
from dotenv import load_dotenv

# Load env vars before anything else
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fortress.core.config import settings
from fortress.core.errors import FortressError
from fortress.database import engine, Base
from fortress import models  # noqa: F401  registers tables
from fortress.routers import accounts, advisor, bills, debts, envelopes, safe_to_spend, schedules, transactions

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create tables on startup
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)


@app.exception_handler(FortressError)
async def fortress_error_handler(request: Request, exc: FortressError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (envelopes, accounts, debts, bills, transactions, schedules, safe_to_spend, advisor):
    app.include_router(module.router, prefix=settings.API_PREFIX)


@app.get("/health")
def health():
    return {"status": "ok", "project": settings.PROJECT_NAME}
