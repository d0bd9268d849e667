"""Base capability interfaces shared by provider adapters."""

from unisearch.adapters.base.capabilities import ProviderCapabilities
from unisearch.adapters.base.degradation import DegradingProvider

__all__ = ["DegradingProvider", "ProviderCapabilities"]
