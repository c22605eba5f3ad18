"""
Configuration of the growth classification engine.

Uses `pydantic-settings` to read settings from environment variables and/or
a `.env` file. Every attribute of `Settings` can be overridden by an
environment variable with the same name.

Example `.env`:
    APP_NAME=growth_engine
    ENV=prod
    MAX_DEPTH=500
    DEFAULT_VARIABLE=n
    FLOAT_PRECISION=4
    LOG_LEVEL=DEBUG
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration.

    Attributes:
        APP_NAME:
            Application name (shown in the FastAPI docs).
        ENV:
            Runtime environment: "dev", "prod", "test", ...
        MAX_DEPTH:
            Maximum nesting depth of a structural tree. Deeper trees are
            rejected as malformed input instead of exhausting the stack.
        DEFAULT_VARIABLE:
            Size variable used by recurrences that do not name one.
        FLOAT_PRECISION:
            Significant digits used when rendering irrational exponents
            and bases (e.g. n^1.58).
        LOG_LEVEL:
            Level passed to `logging.basicConfig` by the HTTP app.
    """

    APP_NAME: str = "growth_engine"
    ENV: str = "dev"

    MAX_DEPTH: int = 200
    DEFAULT_VARIABLE: str = "n"
    FLOAT_PRECISION: int = 3

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )


settings = Settings()
