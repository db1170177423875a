"""Environment-driven configuration (thresholds, cache size, API key)."""
