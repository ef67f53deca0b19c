import logging
from functools import lru_cache

from pydantic import Field, PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values are loaded from environment variables (or a `.env` file) with
    fallback defaults.

    Attributes:
        db_host (str): Hostname of the PostgreSQL server.
        db_port (int): Port of the PostgreSQL server.
        db_name (str): Name of the database holding resumes, positions and bullets.
        db_user (str): Database user.
        db_password (str): Database password.
        database_url_override (str | None): A full SQLAlchemy URL used instead of the
            assembled PostgreSQL URL, e.g. `sqlite:///./resume_builder.db` for local work.
        sql_echo (bool): Whether SQLAlchemy should echo SQL statements.
        default_template_id (str): Template used for resumes that have none set.
        log_level (str): Root log level applied when the application is created.

    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    # Database settings
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="resume_builder", validation_alias="DB_NAME")
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: str = Field(default="", validation_alias="DB_PASSWORD")
    database_url_override: str | None = Field(
        default=None,
        validation_alias="DATABASE_URL_OVERRIDE",
    )
    sql_echo: bool = Field(default=False, validation_alias="SQL_ECHO")

    @computed_field
    @property
    def database_url(self) -> PostgresDsn:
        """
        Assembled database URL from components.

        Returns:
            PostgresDsn: The fully assembled PostgreSQL connection URL.

        Notes:
            1. The scheme is set to "postgresql".
            2. The username, password, host, port, and database name are retrieved from the instance attributes.

        """
        return PostgresDsn.build(
            scheme="postgresql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            path=self.db_name,
        )

    @property
    def sqlalchemy_url(self) -> str:
        """The URL handed to `create_engine`: the override when set, else the PostgreSQL URL."""
        if self.database_url_override:
            return self.database_url_override
        return str(self.database_url)

    # Builder settings
    default_template_id: str = Field(
        default="classic_v1",
        validation_alias="DEFAULT_TEMPLATE_ID",
    )

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        Settings: The global settings instance, containing all configuration values.

    Raises:
        ValidationError: If environment variables are present but invalid.

    Notes:
        1. Reads configuration from environment variables and the .env file.
        2. The function returns a cached instance to avoid repeated parsing of the .env file.
        3. This function performs disk access to read the .env file on first call.

    """
    return Settings()
