import os
from datetime import timedelta

# DEV defaults; override through env vars in any real deployment.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE = timedelta(days=int(os.getenv("JWT_EXPIRE_DAYS", "30")))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./eduvillage.db")

DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]

# Requests running longer than this are answered with 504
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

# Course listing pagination
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
