import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _setting(key, default=None):
    """env.yaml wins, then the process environment, then the default"""
    if key in data:
        return data[key]
    return os.environ.get(key, default)


def _flag(key, default=False) -> bool:
    value = _setting(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _list(key, default=None) -> list:
    """Comma-separated string (env vars) or YAML list"""
    value = _setting(key, default if default is not None else [])
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(value or [])


class ApplicationConfig:
    DB_URI = _setting("DB_URI", os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./app.db"))
    APP_URL = _setting("APP_URL", "http://localhost:8000")
    API_PREFIX = _setting("API_PREFIX", "/api")
    API_PORT = int(_setting("API_PORT", 8000))
    API_HOST = _setting("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _list("CORS_ORIGINS")
    CORS_ALLOW_CREDENTIALS = _flag("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _setting("LOG_LEVEL", "INFO")
    ENVIRONMENT = _setting("ENVIRONMENT", "development")

    # SSO (XSUAA)
    XSUAA_ENABLED = _flag("XSUAA_ENABLED", False)
    # Local stand-in for a bound xsuaa service: {clientid, clientsecret, url, ...}
    XSUAA_CREDENTIALS = data.get("XSUAA_CREDENTIALS")
    SSO_HTTP_TIMEOUT = float(_setting("SSO_HTTP_TIMEOUT", 10.0))
    SSO_VERIFY_ID_TOKEN = _flag("SSO_VERIFY_ID_TOKEN", False)

    # Shared with the local email/password path
    SESSION_COOKIE_NAME = _setting("SESSION_COOKIE_NAME", "better-auth.session_token")
    LOGIN_PATH = _setting("LOGIN_PATH", "/login")
    LANDING_PATH = _setting("LANDING_PATH", "/dashboard")
