"""Error types raised by curve views, sensitivities and aggregation."""


class CreditCurveError(Exception):
    """Base class for errors raised by the credit curve library."""

    pass


class InvalidDateOrder(CreditCurveError, ValueError):
    """Raised when a day count convention does not accept the date ordering."""

    pass


class ParameterCountMismatch(CreditCurveError, ValueError):
    """Raised when a sensitivity vector does not match the curve parameter count."""

    pass


class IndexOutOfRange(CreditCurveError, IndexError):
    """Raised when a parameter index is outside [0, parameter_count)."""

    pass


class MissingFxRate(CreditCurveError, KeyError):
    """Raised when an FX rate provider cannot supply a currency pair."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class UnresolvedCurve(CreditCurveError, LookupError):
    """Raised when aggregation cannot find the curve owning a point sensitivity."""

    pass
