from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from france_geo.api.v1 import api_router
from france_geo.api.v1.exception_handlers import register_exception_handlers
from france_geo.core.config import settings
from france_geo.db.session import db_manager
from france_geo.middlewares.logging_middleware import LoggingMiddleware
from france_geo.utils.logger import configure_logging, get_logger


configure_logging(settings.debug)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.create_tables_on_startup:
        logger.info("Creating database tables")
        db_manager.create_all()
    yield


app = FastAPI(title="France Geo API", lifespan=lifespan)

allowed_origins = settings.allowed_hosts_list
logger.info(f"CORS allowed origins: {allowed_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "healthy", "message": "Backend is running"}


@app.get("/")
async def root():
    return {"message": "France Geo API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
