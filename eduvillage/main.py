import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eduvillage.core.config import CORS_ORIGINS, REQUEST_TIMEOUT_SECONDS
from eduvillage.core.error_handlers import register_exception_handlers
from eduvillage.core.logging_middleware import LoggingMiddleware
from eduvillage.core.timeout_middleware import TimeoutMiddleware
from eduvillage.db.init_db import init_db
from eduvillage.routers.auth import router as auth_router
from eduvillage.routers.courses import router as courses_router
from eduvillage.routers.lectures import router as lectures_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="EduVillage")

# Middleware (last added runs first)
app.add_middleware(TimeoutMiddleware, timeout=REQUEST_TIMEOUT_SECONDS)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(courses_router, prefix="/courses", tags=["courses"])
app.include_router(lectures_router, prefix="/lectures", tags=["lectures"])
