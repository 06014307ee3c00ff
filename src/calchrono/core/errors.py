class CalchronoError(Exception):
    """Base error."""


class DateTimeError(CalchronoError, ValueError):
    """A date, time or field could not be produced."""


class InvalidFieldValueError(DateTimeError):
    """A raw field value is outside the legal range of its chronology."""


class InvalidDateError(DateTimeError):
    """Individually legal fields do not combine to a real date."""


class UnsupportedFieldError(DateTimeError):
    """The field is not defined for this chronology or value type."""


class RangeOverflowError(DateTimeError):
    """Arithmetic left the representable year or epoch-day range."""


class DeviationConfigError(CalchronoError):
    """Malformed Hijrah deviation entry or file."""

    def __init__(self, message: str, *, line: int = 0, token: str = "") -> None:
        super().__init__(message)
        self.line = line
        self.token = token


class ChronologyNotFoundError(CalchronoError, KeyError):
    """No chronology is registered under the requested identifier."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
