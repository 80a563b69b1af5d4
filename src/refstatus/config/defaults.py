"""Default configuration values for refstatus."""

# Status provider defaults
DEFAULT_PROVIDER_CONFIG: dict[str, str | float | None] = {
    "kind": "github",
    "api_url": "https://api.github.com",
    "token": None,
    "timeout": 10.0,  # seconds
}

# Cache policy defaults (all values in seconds)
DEFAULT_CACHE_CONFIG: dict[str, int | bool] = {
    "enabled": True,
    "unknown_ttl": 5 * 60,  # no statuses reported yet
    "pending_ttl": 60,  # pending and recently updated
    "recent_ttl": 10 * 60,  # resolved but may still be corrected
    "settled_ttl": 24 * 60 * 60,  # no updates for a day
    "pending_window": 15 * 60,
    "settled_after": 24 * 60 * 60,
}

SUPPORTED_PROVIDERS: tuple[str, ...] = ("github",)
