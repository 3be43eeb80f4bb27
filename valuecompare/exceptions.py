"""Custom exceptions for the valuecompare engine."""


class ValueCompareError(Exception):
    """Base exception for valuecompare errors."""
    pass


class OptionsError(ValueCompareError):
    """Raised when comparison options are malformed."""
    def __init__(self, message: str, option: str = None):
        super().__init__(message)
        self.message = message
        self.option = option


class ConfigFileError(ValueCompareError):
    """Raised when an options file cannot be read or parsed."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load options from {path}: {reason}")
        self.path = path
        self.reason = reason


class MaxDepthExceededError(ValueCompareError):
    """Raised when maximum recursion depth is exceeded."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path!r}")
        self.depth = depth
        self.path = path
