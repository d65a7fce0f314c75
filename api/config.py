import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///elpris_dev.db")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    ELPRISER_BASE_URL: str = os.getenv("ELPRISER_BASE_URL", "https://www.elprisetjustnu.se")
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10"))
    PREFETCH_INTERVAL_MINUTES: int = int(os.getenv("PREFETCH_INTERVAL_MINUTES", "60"))


settings = Settings()
