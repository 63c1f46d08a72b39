"""
Exceptions raised by the report pipeline.
"""


class PMReportError(Exception):
    """Base class for all fatal report errors."""

    pass


class ConfigError(PMReportError):
    """Invalid analysis settings."""

    pass


class LoaderError(PMReportError):
    """Base class for input loading errors."""

    pass


class FileReadError(LoaderError):
    """An input file could not be read with the expected schema."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class EmptyInputError(LoaderError):
    """No input files were found."""

    pass


class FeatureError(PMReportError):
    """Base class for feature derivation errors."""

    pass


class TimeZoneError(FeatureError):
    """The configured time zone is not known."""

    pass


class TimestampParseError(FeatureError):
    """A timestamp did not match the expected format (strict mode only)."""

    def __init__(self, value, row: int):
        self.value = value
        self.row = row
        super().__init__(f"Unparseable timestamp {value!r} at row {row}")
