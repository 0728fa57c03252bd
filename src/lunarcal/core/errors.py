class LunarCalError(Exception):
    """Base error."""

class ConversionError(LunarCalError, ValueError):
    """Raised when a date lies outside the supported calendar range."""

class MissingComponentError(LunarCalError):
    """Raised when a date cannot be decomposed into calendar components."""

class FetchError(LunarCalError):
    """Raised when an external holiday dataset cannot be obtained or parsed."""
