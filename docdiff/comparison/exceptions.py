class ComparisonError(Exception):
    """Raised when document comparison fails."""


class ComparisonValidationError(ComparisonError):
    """Raised when the provider response violates the comparison contract."""


class ComparisonNetworkError(ComparisonError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
