class SenseiError(Exception):
    """Base class for errors raised by the audit orchestration layer."""


class InvalidHtmlError(SenseiError):
    """Uploaded content does not look like an HTML document."""


class SuggestionError(SenseiError):
    """The suggestion model could not produce usable output."""
