"""Application settings and configuration.

This module defines all configuration options for the Spunk analytics service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spunk_analytics.schemas.tournament import TournamentConfig

DAY_SECONDS = 86_400


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    This class defines all configuration options for the analytics service.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Spunk Analytics", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Key/value store configuration
    kv_backend: Literal["redis", "memory"] = Field(default="redis", alias="KV_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")

    # Retention windows for persisted keys
    counter_ttl_seconds: int = Field(default=365 * DAY_SECONDS, alias="COUNTER_TTL_SECONDS")
    visitor_set_ttl_seconds: int = Field(
        default=90 * DAY_SECONDS,
        alias="VISITOR_SET_TTL_SECONDS",
    )
    tournament_ttl_seconds: int = Field(
        default=30 * DAY_SECONDS,
        alias="TOURNAMENT_TTL_SECONDS",
    )

    # Request metadata supplied by the edge proxy
    client_ip_header: str = Field(default="CF-Connecting-IP", alias="CLIENT_IP_HEADER")
    country_header: str = Field(default="CF-IPCountry", alias="COUNTRY_HEADER")
    mobile_ua_tokens: list[str] = Field(
        default=["Mobile", "Android", "iPhone"],
        alias="MOBILE_UA_TOKENS",
    )

    # Games broken out individually in the admin report
    known_games: list[str] = Field(
        default=[
            "coinflip",
            "dice",
            "mines",
            "crash",
            "limbo",
            "keno",
            "wheel",
            "plinko",
            "hilo",
            "tower",
        ],
        alias="KNOWN_GAMES",
    )

    # Tournament configuration
    tournament_id: str = Field(default="spunkwars-1", alias="TOURNAMENT_ID")
    tournament_name: str = Field(default="SPUNK WARS", alias="TOURNAMENT_NAME")
    # Feb 20 2026 01:33 UTC
    tournament_end_time: int = Field(default=1_771_551_180, alias="TOURNAMENT_END_TIME")
    tournament_points: dict[str, int] = Field(
        default={"referral": 50, "share": 10, "game_win": 3, "faucet_claim": 1},
        alias="TOURNAMENT_POINTS",
    )
    tournament_prize: dict[str, Any] = Field(
        default={
            "type": "ordinal",
            "inscriptionId": (
                "c6e9ad7454cf9bb8b1d75ec9df13229dee1e18f16a5fd57b6549de87e8cce4abi5"
            ),
            "collection": "Puppet Corp",
            "imageUrl": (
                "https://ordinals.com/content/"
                "c6e9ad7454cf9bb8b1d75ec9df13229dee1e18f16a5fd57b6549de87e8cce4abi5"
            ),
        },
        alias="TOURNAMENT_PRIZE",
    )

    # CORS configuration for the game front-end
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def tournament(self) -> TournamentConfig:
        """Return the static configuration of the running tournament.

        Returns:
            Tournament identity, end time, point table and prize metadata
        """
        return TournamentConfig(
            id=self.tournament_id,
            name=self.tournament_name,
            end_time=self.tournament_end_time,
            points=dict(self.tournament_points),
            prize=dict(self.tournament_prize),
        )

    @property
    def cors_headers(self) -> dict[str, str]:
        """Return the CORS headers stamped on every response.

        Returns:
            Mapping of header name to header value
        """
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Methods": ", ".join(self.cors_allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.cors_allow_headers),
        }


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings for dependency injection."""
    return settings
