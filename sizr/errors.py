from __future__ import annotations


class SizrError(Exception):
    """Base class for errors that abort a sizr invocation."""


class InvalidRoot(SizrError):
    def __init__(self, path: str, reason: str = "does not exist"):
        super().__init__(f"Path '{path}' {reason}")
        self.path = path
        self.reason = reason


class InvalidSizeSpec(SizrError, ValueError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"Invalid size '{text}': {reason}")
        self.text = text
        self.reason = reason


class MetadataReadFailure(SizrError):
    """A file the traversal just reported could not be stat'ed."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Failed to get metadata for {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause
