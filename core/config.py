# core/config.py
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import logging

# Load variables from .env file located in the project root directory
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path)
else:
    load_dotenv() # Fallback

class Settings(BaseSettings):
    """Loads configuration settings from environment variables and .env file."""

    # --- Sauce API ---
    API_URL: str = "http://localhost:3000/api"
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", 30.0))

    class Config:
        env_file = '.env'
        env_file_encoding = 'utf-8'
        extra = 'ignore'

# Instantiate settings once for import
settings = Settings()

# --- Logging Setup ---
log_level_str = os.getenv("LOG_LEVEL", "INFO").upper(); log_level = getattr(logging, log_level_str, logging.INFO)
logging.basicConfig(level=log_level, format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
logger = logging.getLogger("Piquante_Core")
logging.getLogger("httpx").setLevel(logging.WARNING); logging.getLogger("httpcore").setLevel(logging.WARNING)

# --- Configuration Validation Checks ---
logger.info(f"Core Settings loaded. Log Level: {log_level_str}")
if not settings.API_URL.startswith(("http://", "https://")):
    logger.warning(f"API_URL '{settings.API_URL}' is not an absolute http(s) URL. Requests will likely fail.")
else:
    logger.info(f"Using Sauce API at: {settings.API_URL}")

try: assert settings.HTTP_TIMEOUT > 0; logger.info(f"HTTP timeout: {settings.HTTP_TIMEOUT}s")
except (AssertionError, ValueError): logger.error(f"Invalid HTTP_TIMEOUT: {settings.HTTP_TIMEOUT}.")
