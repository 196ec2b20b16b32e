"""Custom exceptions for loc-analyzer."""


class AnalyzerError(Exception):
    """Base exception for all analyzer errors."""


class ConfigError(AnalyzerError):
    """Raised when an environment setting cannot be parsed."""


class IngestError(AnalyzerError):
    """Base for failures while turning inputs into text units."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class FileReadError(IngestError):
    """Raised when a file cannot be read from disk."""


class DecodeFailedError(IngestError):
    """Raised when file bytes are not valid UTF-8 text."""


class ArchiveError(IngestError):
    """Raised when an archive is corrupt or of an unsupported type."""
