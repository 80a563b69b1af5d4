"""Custom exception hierarchy for refstatus configuration and status lookups."""


class RefStatusError(Exception):
    """Base exception for all refstatus errors.

    All refstatus-specific exceptions inherit from this class, enabling
    centralized exception handling by the calling deployment workflow.
    """

    pass


class ConfigError(RefStatusError):
    """Invalid refstatus configuration.

    Raised by ConfigLoader for an unreadable or malformed refstatus.yml
    (``config_file``, ``yaml_parse``), for merged YAML and ``REFSTATUS_*`` values
    that fail model validation (``config_validation``), and by create_provider
    for an unsupported ``provider.kind``. Unparseable ``REFSTATUS_*`` values are
    logged and skipped rather than raised.

    Attributes:
        field: Which part of the configuration is at fault
        message: What is wrong with it
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class StatusProviderError(RefStatusError):
    """Base exception for failures talking to a commit status provider.

    A provider answering "not found" is not an error; only transport and
    protocol failures are raised.
    """

    pass


class ProviderConnectionError(StatusProviderError):
    """Error raised when the status provider cannot be reached.

    Attributes:
        base_url: The provider base URL that failed
        original_error: The underlying transport exception, if any
    """

    def __init__(self, base_url: str, original_error: Exception | None = None) -> None:
        """Initialize ProviderConnectionError with base URL and optional cause.

        Args:
            base_url: The provider base URL that failed to connect
            original_error: The underlying exception that caused the failure
        """
        self.base_url = base_url
        self.original_error = original_error
        message = f"Failed to connect to status provider at {base_url}."
        if original_error:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class ProviderAPIError(StatusProviderError):
    """Error raised when the status provider returns an unusable response.

    Attributes:
        url: Request URL
        status_code: HTTP status code returned by the provider
        detail: Optional error detail extracted from the response body
    """

    def __init__(self, url: str, status_code: int, detail: str | None = None) -> None:
        """Create an API error for a failed provider request."""
        self.url = url
        self.status_code = status_code
        self.detail = detail
        message = f"Status provider returned {status_code} for {url}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class PluginStatusError(RefStatusError):
    """Error raised when a ref_status plugin returns an unusable result.

    Attributes:
        plugin: Name of the offending callback
        detail: Why the result was rejected
    """

    def __init__(self, plugin: str, detail: str) -> None:
        self.plugin = plugin
        self.detail = detail
        super().__init__(f"Plugin '{plugin}' returned an invalid status: {detail}")
