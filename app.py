import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
import uvicorn

from config import CredentialStore, settings
from detector import FakeNewsDetector, fake_news_detector
from logger import configure_logging, get_logger
from samples import dataset_availability, load_datasets
from schemas import (
    DatasetsResponse,
    DetectRequest,
    DetectResponse,
    HealthResponse,
    UpdateCredentialRequest,
    UpdateCredentialResponse,
)

log = get_logger("api")

# Rate limiter setup
limiter = Limiter(key_func=get_remote_address)

# Dependencies
def get_detector(request: Request) -> FakeNewsDetector:
    return request.app.state.detector


def get_credentials(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_api_key(request: Request, credentials: CredentialStore = Depends(get_credentials)) -> Optional[str]:
    """Resolve the classifier credential for this request.

    An ``X-OpenAI-Key`` header takes precedence over the stored credential.
    """
    return request.headers.get("X-OpenAI-Key") or credentials.get()


async def verify_service_key(request: Request):
    """Require X-API-Key when SERVICE_API_KEY is configured."""
    if not settings.SERVICE_API_KEY:
        return None
    api_key = request.headers.get("X-API-Key")
    if not api_key or api_key != settings.SERVICE_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key"
        )
    return api_key

# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    configure_logging()
    log.info("Starting Fake News Detection Backend...")
    log.info(
        "Classifier mode: {}",
        "ai" if app.state.credentials.configured else "fallback",
    )

    yield

    log.info("Shutting down...")
    await app.state.detector.classifier.close()
    log.info("Backend shutdown complete")

# Create FastAPI app
app = FastAPI(
    title="Fake News Detection API",
    description="Credibility scoring for news text with an LLM classifier and keyword fallback",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

app.state.detector = fake_news_detector
app.state.credentials = CredentialStore(settings.OPENAI_API_KEY)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Request validation errors are client errors, reported as 400
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": message, "errors": errors}),
    )

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unexpected errors."""
    log.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "timestamp": time.time()
        }
    )

# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(
    detector: FakeNewsDetector = Depends(get_detector),
    api_key: Optional[str] = Depends(get_api_key),
):
    """Health check endpoint to verify service status."""
    try:
        return HealthResponse(
            status="healthy",
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime()),
            services={
                "detector": detector.get_service_status(api_key),
                "datasets": dataset_availability(),
            }
        )
    except Exception as e:
        log.warning("Health check failed: {}", e)
        return HealthResponse(
            status="unhealthy",
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime()),
            services={
                "detector": "unknown",
                "datasets": "unknown"
            }
        )

# Text analysis endpoint
@app.post(
    "/detect",
    response_model=DetectResponse,
    tags=["Analysis"],
)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def detect(
    request: Request,
    detect_request: DetectRequest,
    detector: FakeNewsDetector = Depends(get_detector),
    api_key: Optional[str] = Depends(get_api_key),
):
    """
    Analyze text for fake news detection.

    Uses the LLM classifier when a credential is available, otherwise the
    keyword heuristic. Classifier failures fall back silently.
    """
    try:
        return await detector.detect(detect_request.text, api_key)
    except Exception:
        log.exception("Error analyzing text")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Text analysis failed"
        )

# Sample datasets endpoint
@app.get("/detect", response_model=DatasetsResponse, tags=["Analysis"])
async def get_datasets(
    limit: Optional[int] = Query(None, ge=1, description="Maximum rows per dataset"),
):
    """Return the rows of fake.csv, real.csv and manual_testing.csv."""
    data = await run_in_threadpool(load_datasets, None, limit)
    return DatasetsResponse(data=data)

# Credential update endpoint
@app.post(
    "/update-credential",
    response_model=UpdateCredentialResponse,
    tags=["System"],
    dependencies=[Depends(verify_service_key)]
)
async def update_credential(
    update_request: UpdateCredentialRequest,
    credentials: CredentialStore = Depends(get_credentials),
):
    """Replace the classifier credential used by later requests."""
    credentials.set(update_request.api_key)
    log.info("Classifier credential updated")
    return UpdateCredentialResponse()

# Root endpoint
@app.get("/", tags=["System"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Fake News Detection API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "detect": "/detect",
            "update_credential": "/update-credential",
            "health": "/health",
            "docs": "/docs" if settings.DEBUG else "disabled"
        },
        "headers": {
            "X-OpenAI-Key": "Classifier credential for this request; overrides the stored one",
            "X-API-Key": "Service key for /update-credential when SERVICE_API_KEY is set"
        }
    }

if __name__ == "__main__":
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )
