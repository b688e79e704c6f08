"""
News Analysis Service - HTTP gateway
Scores news text against the prediction service with local fallback
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
import logging
import time
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from newsanalysis.client import NewsAnalysisClient
from newsanalysis.supervisor import AnalysisSupervisor, SupervisedAnalysis


# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('logs/newsanalysis.log') if os.path.exists('logs') else logging.NullHandler()
    ]
)

logger = logging.getLogger(__name__)

# Load environment variables early so Settings picks them up
load_dotenv()


class Config:
    """Service configuration from environment variables"""

    VERSION = "1.0.0"
    TITLE = "News Analysis Service"
    DESCRIPTION = "Fake news scoring with remote ensemble and local fallback"

    MAX_TEXT_LENGTH = int(os.getenv("MAX_TEXT_LENGTH", "10000"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    @classmethod
    def validate(cls, service_client: NewsAnalysisClient):
        """Log current configuration"""
        logger.info("Configuration loaded:")
        logger.info(f"  Prediction service: {service_client.config.base_url}")
        logger.info(f"  Timeout: {service_client.config.timeout_ms} ms")
        logger.info(f"  Max text length: {cls.MAX_TEXT_LENGTH}")


config = Config()


class Metrics:
    """Track service metrics"""

    def __init__(self):
        self.total_requests = 0
        self.failed_requests = 0
        self.by_source = {"remote": 0, "local": 0, "supervisor": 0}
        self.total_processing_time = 0.0
        self.start_time = time.time()

    def record_request(self, source: Optional[str], processing_time: float):
        """Record request outcome, source None for a failed request"""
        self.total_requests += 1
        if source is None:
            self.failed_requests += 1
        else:
            self.by_source[source] += 1
        self.total_processing_time += processing_time

    def get_stats(self) -> Dict[str, Any]:
        """Get current metrics"""
        uptime = time.time() - self.start_time
        avg_time = self.total_processing_time / self.total_requests if self.total_requests > 0 else 0

        return {
            "total_requests": self.total_requests,
            "remote_results": self.by_source["remote"],
            "local_fallbacks": self.by_source["local"],
            "supervisor_fallbacks": self.by_source["supervisor"],
            "failed_requests": self.failed_requests,
            "average_processing_time": f"{avg_time:.3f}s",
            "uptime_seconds": int(uptime)
        }


metrics = Metrics()

client = NewsAnalysisClient()
supervisor = AnalysisSupervisor(client)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("=" * 60)
    logger.info(f"Starting {config.TITLE} v{config.VERSION}")
    logger.info("=" * 60)

    config.validate(client)

    if await client.check_health():
        logger.info(f"Prediction service connected: {client.config.base_url}")
    else:
        logger.warning(f"Prediction service unreachable: {client.config.base_url}. Local analysis only")

    logger.info("Service ready")

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title=config.TITLE,
    version=config.VERSION,
    description=config.DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG") else "An error occurred"
        }
    )


# Request/Response models
class AnalyzeRequest(BaseModel):
    """Analysis request model"""

    model_config = {"protected_namespaces": ()}

    text: str = Field(..., min_length=1, max_length=config.MAX_TEXT_LENGTH, description="News text to analyze")
    model_name: Optional[str] = Field(None, description="Model to use, defaults to the ensemble")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        if not v.strip():
            raise ValueError('Please enter a news article or headline to analyze')
        return v


class AnalyzeResponse(BaseModel):
    """Analysis response: the result in wire format plus where it came from"""

    result: Dict[str, Any]
    source: str
    notice: Optional[str] = None
    processing_time: float


class ConfigUpdate(BaseModel):
    base_url: Optional[str] = Field(None, min_length=1)
    timeout_ms: Optional[int] = Field(None, gt=0)


# API endpoints
@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "service": config.TITLE,
        "version": config.VERSION,
        "status": "operational",
        "endpoints": {
            "analyze": "POST /analyze",
            "health": "GET /health",
            "models": "GET /models",
            "config": "PUT /config",
            "metrics": "GET /metrics"
        },
        "prediction_service": client.config.base_url
    }


@app.get("/health")
async def health_check():
    """Gateway health plus prediction service reachability"""
    backend_healthy = await client.check_health()
    return {
        "status": "healthy",
        "mode": "remote" if backend_healthy else "local-only",
        "components": {
            "prediction_service": {
                "url": client.config.base_url,
                "healthy": backend_healthy
            },
            "local_engine": {"healthy": True}
        }
    }


@app.get("/models")
async def list_models():
    return {"models": await client.get_available_models()}


@app.put("/config")
async def update_config(update: ConfigUpdate):
    """Point the gateway at another prediction service"""
    new_config = client.configure(base_url=update.base_url, timeout_ms=update.timeout_ms)
    return {"base_url": new_config.base_url, "timeout_ms": new_config.timeout_ms}


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest):
    """Score a news text"""
    start = time.time()
    try:
        analysis: SupervisedAnalysis = await supervisor.analyze(request.text, request.model_name)
    except Exception:
        metrics.record_request(None, time.time() - start)
        raise
    processing_time = time.time() - start
    metrics.record_request(analysis.source, processing_time)

    if analysis.degraded:
        logger.info(f"Served {analysis.source} analysis: {analysis.notice}")

    return AnalyzeResponse(
        result=analysis.result.to_wire(),
        source=analysis.source,
        notice=analysis.notice,
        processing_time=round(processing_time, 3)
    )


@app.get("/metrics")
async def get_metrics():
    """Service metrics"""
    return {"metrics": metrics.get_stats()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8001")),
        reload=bool(os.getenv("DEBUG")),
        log_level="info"
    )
