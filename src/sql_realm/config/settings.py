"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sql_realm.domain.realm_config import (
    JAAS_CONTEXT_PROPERTY,
    SQL_GROUPS_PROPERTY,
    SQL_JNDI_PROPERTY,
    SQL_PASSWORD_PROPERTY,
)

NonEmptyStr = Annotated[str, Field(min_length=1)]
NonNegativeFloat = Annotated[float, Field(ge=0.0)]


class Settings(BaseSettings):
    """Environment-driven realm settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jaas_context: str | None = Field(default=None, validation_alias="REALM_JAAS_CONTEXT")
    sql_jndi: str | None = Field(default=None, validation_alias="REALM_SQL_JNDI")
    sql_password: str | None = Field(default=None, validation_alias="REALM_SQL_PASSWORD")
    sql_groups: str | None = Field(default=None, validation_alias="REALM_SQL_GROUPS")
    data_sources: dict[NonEmptyStr, NonEmptyStr] = Field(
        default_factory=dict,
        validation_alias="REALM_DATA_SOURCES",
    )
    password_scheme: Literal["bcrypt", "jasypt-strong"] = Field(
        default="bcrypt",
        validation_alias="REALM_PASSWORD_SCHEME",
    )
    connect_timeout_seconds: NonNegativeFloat = Field(
        default=30.0,
        validation_alias="REALM_CONNECT_TIMEOUT_SECONDS",
    )
    statement_timeout_seconds: NonNegativeFloat = Field(
        default=30.0,
        validation_alias="REALM_STATEMENT_TIMEOUT_SECONDS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def realm_properties(self) -> dict[str, str]:
        """Return realm activation properties, omitting unset ones."""

        candidates = {
            JAAS_CONTEXT_PROPERTY: self.jaas_context,
            SQL_JNDI_PROPERTY: self.sql_jndi,
            SQL_PASSWORD_PROPERTY: self.sql_password,
            SQL_GROUPS_PROPERTY: self.sql_groups,
        }
        return {name: value for name, value in candidates.items() if value is not None}


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache realm settings."""

    return Settings()
