"""Provider adapter layer.

Provider adapters (Algolia, Elasticsearch, OpenSearch, Typesense,
Meilisearch) hold a ``DegradingProvider`` for capability checks and
client-side fallbacks around their own HTTP calls.
"""
