import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _split_origins(value):
    if not value or value.strip() == "*":
        return "*"
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    # ================= DATABASE =================
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ================= TOKENS =================
    # The service key supplied by the deployment signs per-user tokens
    JWT_SECRET_KEY = os.getenv(
        "JWT_SECRET_KEY",
        "dev-secret-sexual-health-ed-CHANGE-IN-PRODUCTION"
    )
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        hours=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_HOURS", "24"))
    )

    # ================= CORS =================
    CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS", "*"))

    # ================= KEY-VALUE STORE =================
    KV_MAX_ATTEMPTS = int(os.getenv("KV_MAX_ATTEMPTS", "3"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
