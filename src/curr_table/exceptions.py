"""Custom exceptions for the curr-table converter."""


class CurrTableException(Exception):
    """Base exception for curr-table.

    All custom exceptions in this package should inherit from this base class.
    """

    pass


class RateProviderException(CurrTableException):
    """Raised when the rate-lookup provider cannot return a rate.

    This exception is raised when:
    - The provider cannot be reached or times out
    - The provider answers with an HTTP error status
    - A currency code is unknown to the provider
    - The response does not contain a usable rate

    Attributes:
        from_currency: Source currency code of the failed lookup
        to_currency: Target currency code of the failed lookup
        original_error: The original exception, if any
    """

    def __init__(
        self,
        message: str,
        from_currency: str | None = None,
        to_currency: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.original_error = original_error


class ConfigurationException(CurrTableException):
    """Raised when configuration errors occur.

    This exception is raised when:
    - An environment variable holds a value of the wrong type
    - An unknown log level is requested

    Attributes:
        config_key: The configuration key that caused the error
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: str | None = None,
    ):
        super().__init__(message)
        self.config_key = config_key
        self.config_value = config_value
