import os
import logging
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)


def load_env(env_path: Optional[str] = None):
    """Manual .env loader. Forces values into os.environ."""
    env_path = env_path or os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        logger.info(f"Loading config from {env_path}...")
        with open(env_path, "r") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" in line:
                    key, val = line.split("=", 1)
                    k = key.strip()
                    v = val.strip()
                    # FORCE override existing environment variables
                    os.environ[k] = v
                    logger.debug(f"  - Set {k}={v}")


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw or raw.lower() in ("none", "null", "unbounded"):
        return None
    return int(raw)


# Load env BEFORE anything else
load_env()


class Settings(BaseModel):
    # 1. Card geometry
    cards_width: float = float(os.getenv("CARDS_WIDTH", "240"))
    cards_ratio: float = float(os.getenv("CARDS_RATIO", "0.75"))

    # 2. Presentation
    card_size_class_prefix: str = os.getenv("CARD_SIZE_CLASS_PREFIX", "news__cardSize-")

    # 3. Height limit in single-card rows (None = unbounded)
    max_rows_amount: Optional[int] = _optional_int("MAX_ROWS_AMOUNT")

    # 4. Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


# Global settings instance
settings = Settings()

def get_settings():
    return settings
