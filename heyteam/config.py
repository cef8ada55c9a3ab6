import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Backend API
API_BASE_URL = os.getenv("HEYTEAM_API_URL", "https://portal.heyteam.ai").rstrip("/")
REQUEST_TIMEOUT = float(os.getenv("HEYTEAM_REQUEST_TIMEOUT", "30"))

# Probe used to tell a dead backend apart from a dead network connection
CONNECTIVITY_TEST_URL = os.getenv("HEYTEAM_CONNECTIVITY_URL", "https://httpbin.org/get")
CONNECTIVITY_TIMEOUT = float(os.getenv("HEYTEAM_CONNECTIVITY_TIMEOUT", "10"))

# Session credentials issued by the portal login flow
SESSION_TOKEN = os.getenv("HEYTEAM_SESSION_TOKEN")
SESSION_COOKIE = os.getenv("HEYTEAM_SESSION_COOKIE")
USER_TYPE = os.getenv("HEYTEAM_USER_TYPE")  # "admin" or "contact"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Toast notices disappear after this many milliseconds unless overridden
TOAST_DURATION_MS = int(os.getenv("TOAST_DURATION_MS", "3000"))
