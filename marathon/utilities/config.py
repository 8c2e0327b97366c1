"""Configuration management for the Money Marathon application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Sessions
SESSION_SECRET: Final[str] = os.getenv('SESSION_SECRET', '')
SESSION_MAX_AGE: Final[int] = int(os.getenv('SESSION_MAX_AGE', str(24 * 60 * 60)))
SESSION_COOKIE: Final[str] = os.getenv('SESSION_COOKIE', 'sessionId')
SESSION_HTTPS_ONLY: Final[bool] = os.getenv('SESSION_HTTPS_ONLY', 'False').lower() == 'true'

# Display
CURRENCY_SYMBOL: Final[str] = os.getenv('CURRENCY_SYMBOL', 'R')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MARATHON_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
