# core/settings/base_settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlatformBaseSettings(BaseSettings):
    """
    Common base for every settings section.

    Values come from the process environment or ``.env``; fields may also be
    passed by name, which is how tests build isolated settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
