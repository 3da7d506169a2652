import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from slowapi.middleware import SlowAPIMiddleware
from dotenv import load_dotenv

from app.custom_error import ConfigurationMissing
from app.services.config import settings
from app.utils.db import init_db, close_db, is_connected
from app.routers.webhooks import router as webhooks_router

# Load environment variables
load_dotenv()

# Logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn.error")

# Create FastAPI app
app = FastAPI(
    title="Clerk User Sync",
    description="Keeps MongoDB users in sync with Clerk webhooks",
    version="0.1.0",
    redoc_url="/redoc",
    docs_url="/docs",
)

app.include_router(webhooks_router, prefix="/api")

# Rate limiting
limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Root endpoint
@app.get("/")
@limiter.limit("100/minute")
def read_root(request: Request):
    return {"message": "Clerk User Sync is running"}


@app.get("/health")
@limiter.exempt
def health():
    return {
        "status": "ok",
        "database": "connected" if is_connected() else "disconnected",
    }


@app.on_event("startup")
async def start_app():
    # Without the signing secret no webhook can ever be verified
    if not settings.SIGNING_SECRET:
        logger.critical("❌ SIGNING_SECRET is missing. Add it from the Clerk Dashboard to .env")
        raise ConfigurationMissing("SIGNING_SECRET")

    try:
        logger.info("🚀 Initializing database (startup)...")
        await init_db()
    except Exception as e:
        # Requests retry the connection lazily
        logger.error(f"❌ Database initialization failed: {repr(e)}")


@app.on_event("shutdown")
async def stop_app():
    await close_db()


# Local run entrypoint
if __name__ == "__main__":
    import uvicorn
    port = settings.PORT
    uvicorn.run("app.server:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
