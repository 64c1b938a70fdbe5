import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobly.config import settings
from jobly.errors import JoblyError
from jobly.routers import auth, jobs, users

logger = logging.getLogger("jobly")
logger.setLevel(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: integrity-check an existing database
    if settings.db_path.exists():
        try:
            conn = sqlite3.connect(str(settings.db_path))
            result = conn.execute("PRAGMA integrity_check").fetchone()
            conn.close()
            if result and result[0] == "ok":
                logger.info("Database integrity check passed.")
            else:
                logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
        except sqlite3.Error as exc:
            logger.error("Could not run startup integrity check: %s", exc)
    else:
        logger.warning("No database at %s; run init_db() before serving.", settings.db_path)
    yield


app = FastAPI(
    title="Jobly",
    description="Job postings and companies, with role-based access",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status: int, message) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": message, "status": status}})


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    return _error_response(400, messages)


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
