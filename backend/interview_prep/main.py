import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .errors import AppError
from .utils.logger import configure_logging
from .api.resume import tailor, library, upload, pdf, match
from .api.documents import listing, download, delete
from .api.jobs import applications, analyze
from .api.interview import questions, feedback, transcribe

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Interview Prep API",
    description="Resume tailoring, document storage, job tracking and interview practice.",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error rendering ---

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- Mount Routers ---

api_prefix = settings.API_PREFIX

# Resumes
app.include_router(tailor.router, prefix=api_prefix, tags=["Resume"])
app.include_router(library.router, prefix=api_prefix, tags=["Resume"])
app.include_router(upload.router, prefix=api_prefix, tags=["Resume"])
app.include_router(pdf.router, prefix=api_prefix, tags=["Resume"])
app.include_router(match.router, prefix=api_prefix, tags=["Resume"])

# Documents
app.include_router(listing.router, prefix=api_prefix, tags=["Documents"])
app.include_router(download.router, prefix=api_prefix, tags=["Documents"])
app.include_router(delete.router, prefix=api_prefix, tags=["Documents"])

# Jobs
app.include_router(applications.router, prefix=api_prefix, tags=["Jobs"])
app.include_router(analyze.router, prefix=api_prefix, tags=["Jobs"])

# Interview practice
app.include_router(questions.router, prefix=api_prefix, tags=["Interview"])
app.include_router(feedback.router, prefix=api_prefix, tags=["Interview"])
app.include_router(transcribe.router, prefix=api_prefix, tags=["Interview"])


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "ok", "message": "API is running"}
