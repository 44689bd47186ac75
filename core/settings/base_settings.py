from pydantic_settings import BaseSettings, SettingsConfigDict


class BackoBaseSettings(BaseSettings):
    """Common config: read .env, ignore unrelated variables, allow field names."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
