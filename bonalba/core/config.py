# bonalba/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    FIREBASE_PROJECT_ID: str = os.getenv("FIREBASE_PROJECT_ID", "bonalba-ops")
    FIREBASE_WEB_API_KEY: str = os.getenv("FIREBASE_WEB_API_KEY", "")
    FIREBASE_SERVICE_ACCOUNT_PATH: str = os.getenv(
        "FIREBASE_SERVICE_ACCOUNT_PATH",
        "firebase-service-account.json",
    )

    # Key-value store backing every collection document
    KV_BACKEND: str = os.getenv("KV_BACKEND", "firestore").lower()
    KV_COLLECTION: str = os.getenv("KV_COLLECTION", "kv_store")

    # Every route is mounted under this prefix
    API_PREFIX: str = os.getenv("API_PREFIX", "/api").rstrip("/")

    CORS_ORIGINS: list = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Bare usernames at login are mapped to <username>@<EMAIL_DOMAIN>
    EMAIL_DOMAIN: str = os.getenv("EMAIL_DOMAIN", "bonalba.com")
    DEMO_PASSWORD: str = os.getenv("DEMO_PASSWORD", "123456")
    AUTH_TIMEOUT_SECONDS: float = float(os.getenv("AUTH_TIMEOUT_SECONDS", "15"))

    HISTORICO_LIMIT: int = int(os.getenv("HISTORICO_LIMIT", "500"))
    APPCC_LIMIT: int = int(os.getenv("APPCC_LIMIT", "1000"))

    # Safe range for cold-room readings, in °C
    TEMPERATURE_MIN: float = float(os.getenv("TEMPERATURE_MIN", "0"))
    TEMPERATURE_MAX: float = float(os.getenv("TEMPERATURE_MAX", "4"))

    # Inline incidencia photos (base64 data URL length); a Firestore document holds at most 1 MiB
    PHOTO_MAX_CHARS: int = int(os.getenv("PHOTO_MAX_CHARS", "900000"))


settings = Settings()
