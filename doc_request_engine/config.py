import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    LOG_LEVEL = os.getenv("DOC_ENGINE_LOG_LEVEL", "INFO").upper()
    # Empty value disables the rotating file handler
    LOG_FILE = os.getenv("DOC_ENGINE_LOG_FILE", "doc_engine.log")

    STRICT_CATALOG = _flag("DOC_ENGINE_STRICT_CATALOG", "true")

    HOST = os.getenv("DOC_ENGINE_HOST", "0.0.0.0")
    PORT = int(os.getenv("DOC_ENGINE_PORT", "8000"))


settings = Settings()
