"""Exceptions raised while generating and registering API keys."""

from pathlib import Path


class KeyGenError(Exception):
    """Base error for key generation and registration."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.detail = detail


class EntropyUnavailable(KeyGenError):
    """The OS entropy source could not be read."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            "Error while reading from the OS entropy source",
            code="entropy_unavailable",
            detail=detail,
        )


class PropertiesFileError(KeyGenError):
    """Base error for properties file access."""

    def __init__(
        self,
        message: str,
        path: Path | str,
        code: str | None = None,
        detail: str | None = None,
    ):
        super().__init__(message, code=code, detail=detail)
        self.path = Path(path)


class FileNotReadable(PropertiesFileError):
    """The properties file could not be opened or read."""

    def __init__(self, path: Path | str, detail: str | None = None):
        super().__init__(
            f"Error opening {path} for reading",
            path,
            code="file_not_readable",
            detail=detail,
        )


class FileNotWritable(PropertiesFileError):
    """The properties file could not be opened or replaced for writing."""

    def __init__(self, path: Path | str, detail: str | None = None):
        super().__init__(
            f"Error opening {path} for writing",
            path,
            code="file_not_writable",
            detail=detail,
        )


class LineTooLong(PropertiesFileError):
    """A line in the properties file exceeds the maximum supported length."""

    def __init__(self, path: Path | str, line_number: int, max_length: int):
        super().__init__(
            f"Line {line_number} of {path} exceeds {max_length} characters",
            path,
            code="line_too_long",
        )
        self.line_number = line_number
        self.max_length = max_length
