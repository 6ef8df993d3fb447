"""Exception hierarchy for the exporter.

Sampling failures are classified so the sampler can apply a different
policy to each: a failed source abandons the tick, a malformed record
skips one line, and a failed unit conversion skips one field.
"""


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ConfigurationError(ExporterError):
    """An environment value could not be turned into a valid setting."""


class SourceUnavailableError(ExporterError):
    """The stats source could not produce a batch of lines."""


class MalformedRecordError(ExporterError):
    """A status line is not a well-formed stats record.

    Attributes:
        reason: Human-readable description of what was wrong.
        line: The offending raw line (may be empty when not known).
    """

    def __init__(self, reason: str, line: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line


class UnitConversionError(ExporterError):
    """A size or percentage token could not be converted to a number.

    Attributes:
        token: The raw token that failed to convert.
        reason: Human-readable description of the failure.
    """

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"{reason}: {token!r}")
        self.token = token
        self.reason = reason
