"""
Error taxonomy shared by every layer.

ValidationError aborts a whole request; ProviderError is scoped to one symbol
and ends up in that symbol's ``error`` field; ConfigurationError flags a
missing credential or an unknown provider name.
"""


class InsightsError(Exception):
    """Base class for all errors raised by this service."""


class ValidationError(InsightsError):
    pass


class ConfigurationError(InsightsError):
    pass


class ProviderError(InsightsError):
    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(message)
        self.symbol = symbol
        self.message = message

    def __str__(self) -> str:
        return self.message
