"""Error taxonomy shared by services and routers."""

from __future__ import annotations


class EstateGuardError(Exception):
    """Base exception for the concierge backend."""


class MissingAPIKeyError(EstateGuardError):
    """No Gemini API key was passed or configured."""


class ModelsExhaustedError(EstateGuardError):
    """Every model candidate failed as unavailable."""

    def __init__(self, message: str, last_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class MalformedResponseError(EstateGuardError, ValueError):
    """Model output could not be parsed into a JSON object."""


class ExtractionError(EstateGuardError):
    """Property extraction failed; no partial record is returned."""


class ChatError(EstateGuardError):
    """The chat history cannot be sent to the concierge."""


class TranscriptionError(EstateGuardError):
    """The audio payload cannot be transcribed."""


class FetchProxyError(EstateGuardError):
    """Upstream fetch through the proxy failed."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class StoreWriteError(EstateGuardError):
    """A write to the row store failed after the caller applied it locally."""

    def __init__(self, message: str, hint: str = "") -> None:
        super().__init__(message)
        self.hint = hint


class PropertyNotFoundError(EstateGuardError):
    pass


class DuplicatePropertyError(EstateGuardError):
    pass


class LeadNotFoundError(EstateGuardError):
    pass


class InvalidTransitionError(EstateGuardError):
    """A lead cannot move to the requested pipeline column."""


class ProviderError(EstateGuardError):
    """The model provider rejected or failed a call for a reason other than availability."""
