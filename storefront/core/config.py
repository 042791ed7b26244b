import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Remote store (json-server style REST API)
    store_api_url: str = os.getenv("STORE_API_URL", "http://localhost:3000")
    store_api_timeout: float = float(os.getenv("STORE_API_TIMEOUT", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir: str = os.getenv("LOG_DIR", "")

    # Storefront server
    host: str = os.getenv("STOREFRONT_HOST", "127.0.0.1")
    port: int = int(os.getenv("STOREFRONT_PORT", "8000"))
    reload: bool = os.getenv("STOREFRONT_RELOAD", "False").lower() == "true"


settings = Settings()
