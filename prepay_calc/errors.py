"""Exceptions raised by the prepay-or-invest calculator."""


class ConfigurationError(ValueError):
    """Raised when scenario inputs cannot be normalized into a valid scenario.

    Degenerate numbers (zero principal, zero rate, ...) are not configuration
    errors; they produce neutral results. This error covers unknown option
    values and numbers that are not finite.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
