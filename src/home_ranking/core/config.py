from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Pokémon HOME upstreams
    battle_api_base_url: str = "https://api.battle.pokemon-home.com"
    resource_base_url: str = "https://resource.pokemon-home.com"

    # None means upstream calls never time out.
    upstream_timeout_s: float | None = None

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080

    log_level: str = "INFO"

    @property
    def trainer_icon_base_url(self) -> str:
        return self.resource_base_url.rstrip("/") + "/battledata/img/icons/trainer/"


settings = Settings()
