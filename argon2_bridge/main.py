from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .routes.hashing import router as hashing_router
from .utils.logging import logger
from .workers.pool import HashWorkerPool

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting argon2 bridge (env=%s)", settings.ENV)
    app.state.hash_pool = HashWorkerPool()
    try:
        yield
    finally:
        # in-flight hashes finish; nothing is interrupted mid-computation
        app.state.hash_pool.shutdown(wait=True)

app = FastAPI(title="Argon2 Bridge",
              description="Configurable Argon2 hashing for the calling application",
    version="0.1.0",
    docs_url="/docs",          # Swagger UI
    redoc_url="/redoc",        # ReDoc
    openapi_url="/openapi.json",
    lifespan=lifespan)

app.include_router(hashing_router)

@app.get("/health")
def health():
    return {"ok": True}
