"""
Command result type for editor and transport operations.

Expected edge cases (no pattern loaded, wrong playback state, index out of
range) are reported through a result instead of an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CommandResult:
    """
    Result of a command execution.

    Attributes:
        success: True if the command was valid, False otherwise
        applied: True if the command changed any state
        message: Optional reason or status message
        data: Optional result data
    """

    success: bool
    applied: bool = True
    message: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str | None = None, data: dict[str, Any] | None = None) -> CommandResult:
        """Create a result for a command that changed state."""
        return cls(success=True, applied=True, message=message, data=data)

    @classmethod
    def ignored(cls, message: str, data: dict[str, Any] | None = None) -> CommandResult:
        """
        Create a result for a command that was a guarded no-op.

        Args:
            message: Why nothing happened (e.g. "Already playing")
            data: Optional result data

        Returns:
            CommandResult with success=True, applied=False
        """
        return cls(success=True, applied=False, message=message, data=data)

    @classmethod
    def error(cls, message: str, data: dict[str, Any] | None = None) -> CommandResult:
        """Create an error result."""
        return cls(success=False, applied=False, message=message, data=data)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "status": "ok" if self.applied else ("ignored" if self.success else "error"),
        }
        if self.message is not None:
            result["message"] = self.message
        if self.data is not None:
            result.update(self.data)
        return result
