"""Translate CommandResult into HTTP responses."""

from typing import Any

from fastapi import HTTPException

from padseq_core.result import CommandResult


def command_response(result: CommandResult, error_status: int = 422) -> dict[str, Any]:
    """
    Response body for a command.

    Applied and ignored commands return 200 with ``status`` "ok" or
    "ignored"; failed commands raise HTTPException.
    """
    if not result.success:
        raise HTTPException(status_code=error_status, detail=result.message)
    return result.to_dict()
