"""Gateway error taxonomy and the tagged result returned to callers."""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    SECURITY = "security"
    NOT_FOUND = "not_found"
    REMOTE = "remote"
    PERMISSION = "permission"
    STARTUP = "startup"
    INTERNAL = "internal"


# ════════════════════════════════════════════════════════
# Exception hierarchy — every layer below the dispatcher
# raises these; ToolRegistry.execute turns them into
# ToolResult values.
# ════════════════════════════════════════════════════════

class GatewayError(Exception):
    """Base class for all gateway errors."""
    kind = ErrorKind.INTERNAL


class ValidationError(GatewayError):
    """Missing or malformed tool arguments."""
    kind = ErrorKind.VALIDATION


class SecurityRejection(GatewayError):
    """Target is a direct message or group direct message."""
    kind = ErrorKind.SECURITY


class NotFoundError(GatewayError):
    """Named channel or user alias is not in the directory."""
    kind = ErrorKind.NOT_FOUND


class PostingDisabled(GatewayError):
    """Message posting is not enabled for the target channel."""
    kind = ErrorKind.PERMISSION


class StartupFailure(GatewayError):
    """Gateway cannot start serving (fatal)."""
    kind = ErrorKind.STARTUP


class RemoteServiceError(GatewayError):
    """Slack returned a failure, or could not be reached."""
    kind = ErrorKind.REMOTE

    def __init__(self, code: str, detail: Optional[str] = None):
        self.code = code
        self.detail = detail
        message = f"Slack API error: {code}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


def describe_error(e: Exception) -> tuple[ErrorKind, str]:
    """Classify any exception into an (ErrorKind, message) pair.

    Gateway errors keep their own message. Network failures that slipped
    past the Slack client are reported as remote errors. Anything else is
    internal and only its type name is exposed, the details go to the log.
    """
    if isinstance(e, GatewayError):
        return e.kind, str(e)

    if isinstance(e, httpx.TimeoutException):
        return ErrorKind.REMOTE, "Request to Slack timed out. Please try again."
    if isinstance(e, httpx.HTTPStatusError):
        return ErrorKind.REMOTE, f"Slack returned HTTP {e.response.status_code}."
    if isinstance(e, httpx.TransportError):
        return ErrorKind.REMOTE, "Cannot connect to Slack. Please check connectivity and try again."

    if isinstance(e, asyncio.TimeoutError):
        return ErrorKind.REMOTE, "Request timed out. Please try again."

    if isinstance(e, (KeyError, IndexError)):
        return ErrorKind.INTERNAL, "Unexpected response format from Slack."

    type_name = type(e).__name__
    return ErrorKind.INTERNAL, f"Something went wrong ({type_name}). Check logs for details."


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: rendered text, or a tagged error."""
    ok: bool
    text: str
    kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ToolResult":
        return cls(ok=False, text=f"Error: {message}", kind=kind)
