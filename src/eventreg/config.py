import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[2]


def load_env() -> None:
    # CWD .env first, then the repo-root .env wins when present
    load_dotenv(find_dotenv(usecwd=True), override=False)
    env_path = REPO_ROOT / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=True)


load_env()

# --- Flask / server ---
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
FLASK_ENV = os.getenv("FLASK_ENV", "production")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
API_PREFIX = os.getenv("API_PREFIX", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# --- Storage ---
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")  # json | mongo
DATA_DIR = os.getenv("DATA_DIR", ".")
EVENTS_FILE = os.getenv("EVENTS_FILE", "events.json")
REGISTRATIONS_FILE = os.getenv("REGISTRATIONS_FILE", "registrations.json")

# --- MongoDB (STORE_BACKEND=mongo) ---
MONGODB_URI = os.getenv("MONGODB_URI")
MONGO_DB = os.getenv("MONGO_DB", "event_registration")

# --- Clients ---
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")
MESSAGE_TIMEOUT_MS = int(os.getenv("MESSAGE_TIMEOUT_MS", "5000"))

# --- Collections ---
EVENTS = "events"
REGISTRATIONS = "registrations"
COLLECTIONS = (EVENTS, REGISTRATIONS)

REQUIRED_EVENT_FIELDS = ("title", "description", "date", "location")


def collection_file(collection: str) -> str:
    """Map a collection name to its JSON document filename."""
    if collection == EVENTS:
        return EVENTS_FILE
    if collection == REGISTRATIONS:
        return REGISTRATIONS_FILE
    return f"{collection}.json"
