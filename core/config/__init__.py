from core.config.config_service import (
    ConfigService,
    DateSettings,
    EmbeddingSettings,
    get_config_service,
    reset_config_service,
)

__all__ = [
    "ConfigService",
    "DateSettings",
    "EmbeddingSettings",
    "get_config_service",
    "reset_config_service",
]
