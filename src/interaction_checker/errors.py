from __future__ import annotations
class AnalysisError(Exception):
    """Base class for failures surfaced to the user as a single message."""
    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message
class CredentialError(AnalysisError):
    """Raised when no API key has been configured."""
class InvalidCredentialError(CredentialError):
    """Raised when the remote service rejected the API key."""
class SafetyBlockedError(AnalysisError):
    """Raised when the model refused to answer for content-policy reasons."""
class EmptyResponseError(AnalysisError):
    """Raised when the model returned no usable text."""
class ServiceUnavailableError(AnalysisError):
    """Raised for any other remote failure."""
class StructuredParseFailure(ValueError):
    """The interaction data block was present but could not be decoded."""
class StorageCorruption(ValueError):
    """The persisted history snapshot could not be read back."""
