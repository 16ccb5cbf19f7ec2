# mentorhub/main.py - application entry point
import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mentorhub import models  # noqa: F401  (registers every table on Base.metadata)
from mentorhub.api import auth, document, goal, mentee, mentor, review, session
from mentorhub.config import settings
from mentorhub.database import Base, engine
from mentorhub.exceptions import AppError
from mentorhub.utils.response import error_response, success_response

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="MentorHub API", version=API_VERSION)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# ======================
# ERROR HANDLERS
# ======================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, AppError):
        message = exc.message
    elif exc.status_code == 404:
        message = "Rota não encontrada"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Erro na requisição"

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(error_response("Dados inválidos", errors=errors)),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_response(
            "Erro interno do servidor",
            error=str(exc) if settings.is_development else None,
        ),
    )


# API routers
app.include_router(auth.router, prefix="/api")      # /api/auth/*
app.include_router(mentor.router, prefix="/api")    # /api/mentors/*
app.include_router(mentee.router, prefix="/api")    # /api/mentees/*
app.include_router(session.router, prefix="/api")   # /api/sessions/*
app.include_router(document.router, prefix="/api")  # /api/documents/*
app.include_router(goal.router, prefix="/api")      # /api/goals/*
app.include_router(review.router, prefix="/api")    # /api/reviews/*


@app.get("/")
def root():
    return success_response(
        message="MentorHub API funcionando!",
        version=API_VERSION,
        endpoints={
            "auth": "/api/auth",
            "mentors": "/api/mentors",
            "mentees": "/api/mentees",
            "sessions": "/api/sessions",
            "documents": "/api/documents",
            "goals": "/api/goals",
            "reviews": "/api/reviews",
        },
    )


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "MentorHub API is running",
        "version": API_VERSION,
    }


if __name__ == "__main__":
    uvicorn.run("mentorhub.main:app", host=settings.HOST, port=settings.PORT)
