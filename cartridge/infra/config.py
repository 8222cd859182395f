"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Markdown rendering
    markdown_extensions: list[str] = ["tables", "nl2br", "fenced_code", "sane_lists"]

    # Enhancement
    table_id_prefix: str = "table"

    # Reader state
    roll_history_limit: int | None = None  # None = unbounded

    # App
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "CARTRIDGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
