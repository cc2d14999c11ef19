"""Runtime settings for the intake service, read from the environment."""

import os
from dataclasses import dataclass, replace

from sqlalchemy.engine import URL, make_url

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8081
DEFAULT_DRIVER = "postgresql+psycopg2"


@dataclass(frozen=True)
class Settings:
    """Server bind address and database coordinates.

    ``database_url`` wins over the individual ``db_*`` parts when set.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db_driver: str = DEFAULT_DRIVER
    db_user: str | None = None
    db_password: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str | None = None
    database_url: str | None = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("SERVER_HOST", DEFAULT_HOST),
            port=int(env.get("SERVER_PORT", DEFAULT_PORT)),
            db_driver=env.get("DB_DRIVER", DEFAULT_DRIVER),
            db_user=env.get("DB_USER"),
            db_password=env.get("DB_PASSWORD"),
            db_host=env.get("DB_HOST", "localhost"),
            db_port=int(env.get("DB_PORT", 5432)),
            db_name=env.get("DB_NAME"),
            database_url=env.get("DATABASE_URL"),
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    @property
    def url(self) -> URL:
        """Connection URL assembled from the settings.

        Raises ``sqlalchemy.exc.ArgumentError`` for a malformed ``DATABASE_URL``.
        """
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
