"""
Database connection parameters.

Resolution order:
    1. Google Secret Manager, when DB_SECRET_PROJECT is set. Secrets are read
       at their "latest" version under the names <prefix>host, <prefix>port,
       <prefix>user, <prefix>password and <prefix>name (prefix defaults to
       "db-", override with DB_SECRET_PREFIX).
    2. Environment variables DB_HOST, DB_PORT, DB_USER, DB_PASS, DB_NAME.

A Secret Manager failure is logged and falls back to the environment, so a
local run never needs cloud credentials.
"""

import logging
import os
from dataclasses import dataclass

from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

DEFAULT_DRIVER = "postgresql+psycopg"
DEFAULT_PORT = 5432

_SECRET_FIELDS = {
    "host": "host",
    "port": "port",
    "user": "user",
    "password": "password",
    "database": "name",
}


@dataclass(frozen=True)
class DatabaseSettings:
    host: str
    port: int
    user: str
    password: str
    database: str
    ssl: bool = False
    driver: str = DEFAULT_DRIVER

    def url(self) -> str:
        """Render a SQLAlchemy URL string with credentials escaped."""
        query = {"sslmode": "require"} if self.ssl else {}
        return URL.create(
            self.driver,
            username=self.user or None,
            password=self.password or None,
            host=self.host or None,
            port=self.port,
            database=self.database or None,
            query=query,
        ).render_as_string(hide_password=False)


def _read_secret_values(project_id: str, prefix: str) -> dict:
    """Fetch every connection secret from Secret Manager."""
    from google.cloud import secretmanager

    client = secretmanager.SecretManagerServiceClient()
    values = {}
    for field, suffix in _SECRET_FIELDS.items():
        name = client.secret_version_path(project_id, f"{prefix}{suffix}", "latest")
        resp = client.access_secret_version(request={"name": name})
        values[field] = resp.payload.data.decode("utf-8")
    return values


def load_database_settings(environ=None) -> DatabaseSettings:
    """Return connection parameters from Secret Manager or the environment."""
    env = os.environ if environ is None else environ
    ssl = env.get("DB_SSL", "false").lower() == "true"
    driver = env.get("DB_DRIVER", DEFAULT_DRIVER)

    project_id = env.get("DB_SECRET_PROJECT")
    if project_id:
        try:
            values = _read_secret_values(project_id, env.get("DB_SECRET_PREFIX", "db-"))
            settings = DatabaseSettings(
                host=values["host"],
                port=int(values["port"]),
                user=values["user"],
                password=values["password"],
                database=values["database"],
                ssl=ssl,
                driver=driver,
            )
            logger.info("Loaded database configuration from Secret Manager (project=%s)", project_id)
            return settings
        except Exception as exc:
            logger.warning(
                "Failed to load database configuration from Secret Manager, "
                "falling back to environment variables: %s", exc,
            )

    logger.info("Using database configuration from environment variables")
    return DatabaseSettings(
        host=env.get("DB_HOST", "localhost"),
        port=int(env.get("DB_PORT") or DEFAULT_PORT),
        user=env.get("DB_USER", ""),
        password=env.get("DB_PASS", ""),
        database=env.get("DB_NAME", ""),
        ssl=ssl,
        driver=driver,
    )


def resolve_database_uri(fallback: str | None = None, environ=None) -> str | None:
    """Pick the SQLAlchemy URI for this process.

    DATABASE_URL wins (postgres:// is rewritten for SQLAlchemy 2.0); then
    discrete settings when DB_HOST or DB_SECRET_PROJECT is present; then
    ``fallback``.
    """
    env = os.environ if environ is None else environ
    raw_url = env.get("DATABASE_URL", "")
    if raw_url:
        return raw_url.replace("postgres://", "postgresql://", 1)
    if env.get("DB_HOST") or env.get("DB_SECRET_PROJECT"):
        return load_database_settings(env).url()
    return fallback
