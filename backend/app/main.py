# backend/app/main.py
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from backend.app.config.settings import API_HOST, API_PORT, CORS_ORIGINS, LOG_LEVEL, STANDARD_METRICS
from backend.app.core.errors import EvaluationError
from backend.app.database.seed import seed_admin
from backend.app.database.session import init_db, get_session
from backend.app.routers import analytics, evaluations, forms, interns, users

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    with get_session() as session:
        seed_admin(session)
    yield


# ==================== FastAPI App ====================
app = FastAPI(
    title="Intern Evaluation Service",
    description="Rubric-based intern evaluations with normalized 0-10 scoring and cross-form rankings",
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== Error Mapping ====================
@app.exception_handler(EvaluationError)
async def evaluation_error_handler(request: Request, exc: EvaluationError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# ==================== Routes ====================
app.include_router(users.router)
app.include_router(interns.router)
app.include_router(forms.router)
app.include_router(evaluations.router)
app.include_router(analytics.router)


@app.get("/")
async def root():
    return {
        "message": "Intern Evaluation Service is LIVE",
        "standard_metrics": list(STANDARD_METRICS),
        "status": "ready",
        "docs": "/docs"
    }


@app.get("/api/health")
async def health():
    return {"status": "healthy"}


# ==================== Run Server ====================
if __name__ == "__main__":
    uvicorn.run("backend.app.main:app", host=API_HOST, port=API_PORT, reload=True, log_level="info")
