"""Client-side fallbacks for features a provider cannot serve natively."""

from unisearch.fallbacks.detector import FeatureDetector, PerformanceImpact
from unisearch.fallbacks.processor import FallbackProcessor
from unisearch.fallbacks.streaming import StreamingFallback

__all__ = ["FallbackProcessor", "FeatureDetector", "PerformanceImpact", "StreamingFallback"]
