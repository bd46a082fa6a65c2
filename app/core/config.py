import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Root log level for the service (DEBUG shows per-query counts from the core)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Origins allowed to call the API from a browser, comma separated
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    # How many entries the recent activity feed returns
    ACTIVITY_FEED_LIMIT: int = int(os.getenv("ACTIVITY_FEED_LIMIT", "10"))

    # Name recorded as the actor of activity entries
    ACTIVITY_DEFAULT_USER: str = os.getenv("ACTIVITY_DEFAULT_USER", "Admin")

    # When false, batch create/update trust the client's pre-flight check
    ENFORCE_BATCH_VALIDATION: bool = _env_bool("ENFORCE_BATCH_VALIDATION", True)


settings = Settings()
