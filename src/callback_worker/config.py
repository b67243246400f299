from __future__ import annotations

import shlex

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

_DSN_KEYWORDS = {
    "host": "host",
    "port": "port",
    "user": "username",
    "password": "password",
    "dbname": "database",
}


def _keyword_dsn_to_url(dsn: str) -> URL:
    parts: dict[str, str] = {}
    query: dict[str, str] = {}
    tokens = shlex.split(dsn)
    if not tokens:
        raise ValueError("empty database DSN")
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise ValueError(f"malformed database DSN entry {token!r}")
        if key in _DSN_KEYWORDS:
            parts[_DSN_KEYWORDS[key]] = value
        elif key == "sslmode":
            query["sslmode"] = value
    port = int(parts.pop("port")) if "port" in parts else None
    return URL.create("postgresql+asyncpg", port=port, query=query, **parts)


class Settings(BaseSettings):
    """Worker settings, read from ``BN_*`` environment variables."""

    REDIS_URL: str
    DB_URL: str

    REDIS_POOL_SIZE: int = 100

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 90
    DB_POOL_RECYCLE: int = 300

    KEY_PREFIX: str = "tmvh"
    SCAN_BATCH_SIZE: int = 100
    WAIT_INTERVAL: float = 17.0

    NOTIFY_TIMEOUT: float = 10.0
    CONFIRMATION_TTL_HOURS: int = 240

    LOG_LEVEL: str = "INFO"

    @property
    def redis_url(self) -> str:
        # A bare "host:port" address is accepted as well as a full URL.
        if "://" in self.REDIS_URL:
            return self.REDIS_URL
        return f"redis://{self.REDIS_URL}"

    @property
    def database_url(self) -> str:
        """``DB_URL`` as an asyncpg SQLAlchemy URL.

        Accepts ``postgres://`` / ``postgresql://`` URLs as well as libpq
        keyword DSNs (``host=db user=u dbname=logs sslmode=disable``).
        """
        if "://" in self.DB_URL:
            url = make_url(self.DB_URL)
            if url.drivername not in ("postgres", "postgresql") and not url.drivername.startswith("postgresql+"):
                return self.DB_URL
            url = url.set(drivername="postgresql+asyncpg")
        else:
            url = _keyword_dsn_to_url(self.DB_URL)
        if "sslmode" in url.query:
            # asyncpg takes the libpq sslmode values under the name "ssl".
            sslmode = url.query["sslmode"]
            url = url.difference_update_query(["sslmode"]).update_query_dict({"ssl": sslmode})
        return url.render_as_string(hide_password=False)

    model_config = SettingsConfigDict(
        env_prefix="BN_",
        env_file=".env",
        extra="ignore",
    )
