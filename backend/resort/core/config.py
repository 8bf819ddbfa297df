import os
import re

from dotenv import find_dotenv, load_dotenv


_ENV_ALIASES = {"dev": "development", "prod": "production", "stg": "staging"}


def _load_env_files() -> None:
    """
    Load the resort's .env files without overriding the process environment.

    The base .env is read first. ENV_FILE, when set, names the only extra file
    to read. Otherwise ENVIRONMENT (or ENV) selects .env.<name>, so
    ENVIRONMENT=prod reads .env.production or .env.prod.
    """
    base = find_dotenv(".env", usecwd=True)
    if base:
        load_dotenv(base, override=False)

    env_file = os.environ.get("ENV_FILE")
    if env_file:
        path = env_file if os.path.isabs(env_file) else find_dotenv(env_file, usecwd=True)
        if path:
            load_dotenv(path, override=False)
        return

    name = (os.environ.get("ENVIRONMENT") or os.environ.get("ENV") or "").strip().lower()
    if not name:
        return
    for candidate in dict.fromkeys((f".env.{_ENV_ALIASES.get(name, name)}", f".env.{name}")):
        path = find_dotenv(candidate, usecwd=True)
        if path:
            load_dotenv(path, override=False)
            break


_load_env_files()

# === Environment Configuration ===
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

# === Server Configuration ===
SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")


def _get_int_env(var_name: str, default_value: int) -> int:
    """
    Read an int setting. Values such as "5000;" or "port=5000" still yield
    5000; anything without digits falls back to the default.
    """
    raw = os.environ.get(var_name, str(default_value))
    text = str(raw).strip().rstrip(";")
    try:
        return int(text)
    except ValueError:
        match = re.search(r"[-+]?\d+", text or "")
        if match:
            return int(match.group(0))
    return int(default_value)


def _get_float_env(var_name: str, default_value: float) -> float:
    raw = os.environ.get(var_name, "")
    try:
        return float(str(raw).strip().rstrip(";"))
    except ValueError:
        return float(default_value)


SERVER_PORT = _get_int_env("SERVER_PORT", 5000)
DEBUG = os.environ.get("DEBUG", "true").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()


# === CORS Configuration ===
def _get_cors_origins() -> list[str]:
    """
    Comma-separated CORS_ORIGINS, defaulting to the local admin and guest
    front ends.
    """
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"]
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ORIGINS = _get_cors_origins()

# === Database Configuration ===
MONGODB_URI = os.environ.get("MONGODB_URI") or os.environ.get("MONGO_URL")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "safari_resort")

# === Reports ===
REPORTS_DIR = os.path.abspath(
    os.environ.get("REPORTS_DIR", os.path.join(os.getcwd(), "reports"))
)
REPORT_TIMEZONE = os.environ.get("REPORT_TIMEZONE", "Asia/Colombo")
REPORT_TITLE = os.environ.get("REPORT_TITLE", "Safari Bookings Report")
REPORT_CURRENCY_LABEL = os.environ.get("REPORT_CURRENCY_LABEL", "Rs.")

# === Pricing ===
USD_TO_LKR_RATE = _get_float_env("USD_TO_LKR_RATE", 330.0)
PAYMENT_CURRENCY = os.environ.get("PAYMENT_CURRENCY", "LKR").upper()

# === Application Settings ===
APP_NAME = "Safari Resort Booking API"
APP_VERSION = "1.0.0"
