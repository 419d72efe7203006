import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    UA: str = os.getenv("SW_UA", "SiteWatch/1.0")
    PROBE_TIMEOUT_S: float = float(os.getenv("SW_PROBE_TIMEOUT_S", "10"))
    REFRESH_INTERVAL_S: float = float(os.getenv("SW_REFRESH_INTERVAL_S", "300"))
    MAX_CONNECTIONS: int = int(os.getenv("SW_MAX_CONNECTIONS", "20"))
    LOG_LEVEL: str = os.getenv("SW_LOG_LEVEL", "INFO")

settings = Settings()
