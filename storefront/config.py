"""Storefront configuration read from the environment."""
import os


def _get_float(name: str, default: float) -> float:
    """Read a float env var, falling back to default on bad input."""
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Catalog / stock service
STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "http://localhost:3333")
STOREFRONT_API_TIMEOUT = _get_float("STOREFRONT_API_TIMEOUT", 10.0)

# Persistence slot namespace (cart lives under "{STORAGE_KEY}:cart")
STORAGE_KEY = os.environ.get("STORAGE_KEY", "@RocketShoes")

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Language of user-facing notifications
STOREFRONT_LANGUAGE = os.environ.get("STOREFRONT_LANGUAGE", "pt")
