"""Connection settings read from ``PGCRUD_*`` environment variables.

Settings are loaded on demand by ``get_settings()``, never at import, so a
malformed variable only fails the call that needs a connection.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DbSettings(BaseSettings):
    """Connection settings for ``SqlCon.from_config``.

    ``PGCRUD_DATABASE_URL`` overrides ``database_url``, ``PGCRUD_POOL_SIZE``
    overrides ``pool_size``, and so on.
    """

    database_url: str = Field(default='sqlite:///pgcrud.db', description='SQLAlchemy connection URL')
    pool_size: int = Field(default=5, ge=1, description='Connections kept in the pool')
    pool_timeout: int = Field(default=30, ge=0, description='Seconds to wait for a pooled connection')
    echo: bool = Field(default=False, description='Let SQLAlchemy echo every statement')
    debug: bool = Field(default=False, description='Log SQL and params at DEBUG level')

    model_config = SettingsConfigDict(
        env_prefix='PGCRUD_',
        case_sensitive=False,
        extra='ignore',
    )


def get_settings() -> DbSettings:
    """Read settings from the current environment."""
    return DbSettings()
