# backend/therapy_ai/config.py
import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env"))


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


STORE_DATABASE_URL = os.getenv("STORE_DATABASE_URL", "sqlite:///./therapy_ai_store.db")
AUTO_SEED = _as_bool(os.getenv("AUTO_SEED", "true"))

# delay before the scripted assistant answers (seconds, cosmetic)
AI_REPLY_DELAY_S = float(os.getenv("AI_REPLY_DELAY_S", "0.5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

LOGIN_PATH = "/auth/login"
ADMIN_DASHBOARD_PATH = "/admin"
THERAPIST_DASHBOARD_PATH = "/therapist"
