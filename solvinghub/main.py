import os
import time
import uuid

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from solvinghub.config import Config, logger
from solvinghub.data.repositories import init_db
from solvinghub.errors import register_exception_handlers
from solvinghub.presentation.routes import (
    comment_router,
    problem_router,
    vote_router,
)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        client = request.client.host if request.client else "unknown"
        logger.info(
            f"Request started: {request.method} {request.url.path} - "
            f"ID: {request_id} - Client: {client}"
        )
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path} - "
                f"ID: {request_id} - Status: {response.status_code} - "
                f"Time: {process_time:.4f}s"
            )
            response.headers["X-Request-ID"] = request_id
            return response
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} - "
                f"ID: {request_id} - Error: {e} - "
                f"Time: {process_time:.4f}s"
            )
            raise


@asynccontextmanager
async def life_span(app: FastAPI):
    logger.info("Server is starting...")
    if os.environ.get("TESTING") == "True":
        logger.info("Skipping database initialization for tests")
    elif not Config.IS_CONFIGURED:
        logger.warning("Database or auth settings missing; requests will fail until configured")
    else:
        try:
            await init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise
    yield
    logger.info("Server has been stopped")


app = FastAPI(
    title="SolvingHub API",
    description="Community board for posting problems, voting and discussing them",
    version="1.0.0",
    lifespan=life_span,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

app.include_router(problem_router, prefix="/api")
app.include_router(vote_router, prefix="/api")
app.include_router(comment_router, prefix="/api")


@app.get("/health", tags=["health"])
async def health():
    return {
        "status": "ok",
        "environment": Config.ENVIRONMENT,
        "configured": Config.IS_CONFIGURED,
    }


logger.info("Application startup complete")
