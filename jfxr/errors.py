from __future__ import annotations


class JfxrError(Exception):
    """Base error for the jfxr library."""


class InvalidConfigError(JfxrError):
    """Raised when synthesis options cannot be used."""


class AudioExportError(JfxrError):
    """Raised when rendered samples cannot be written out."""


class JfxrFormatError(JfxrError):
    """Raised when a persisted sound cannot be parsed."""


class JsonSyntaxError(JfxrFormatError):
    """Raised when the payload is not valid JSON."""


class NotAnObjectError(JfxrFormatError):
    """Raised when the top-level JSON value is not an object."""

    def __init__(self) -> None:
        super().__init__("jfxr sound must be a JSON object")


class MissingFieldError(JfxrFormatError):
    """Raised when a required field is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing field: {field!r}")
        self.field = field


class InvalidFieldError(JfxrFormatError):
    """Raised when a field has the wrong type or an unsupported value."""

    def __init__(self, field: str, detail: str | None = None) -> None:
        message = f"Invalid field: {field!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.field = field


class UnsupportedVersionError(JfxrFormatError):
    """Raised when the file was written by a newer version of jfxr."""

    def __init__(self, version: int, supported: int) -> None:
        super().__init__(f"Unsupported jfxr version {version} (newest supported: {supported})")
        self.version = version
        self.supported = supported
