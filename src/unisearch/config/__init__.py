from unisearch.config.settings import Settings

__all__ = ["Settings"]
