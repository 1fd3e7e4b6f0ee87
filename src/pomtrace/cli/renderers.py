"""
JSON output envelope for --json command modes.

Every JSON response has the same outer shape so scripts can branch on
``status`` without knowing the command:

    {"command": "conflicts", "status": "success", "data": {...}}
    {"command": "origin", "status": "error", "error": {"type": "...", "message": "..."}}
"""

import json
from typing import Any, Dict

import click
from pydantic import BaseModel


class JsonRenderer:
    """Renders pydantic response models or errors as a JSON envelope."""

    def __init__(self, command: str):
        self.command = command

    def _emit(self, payload: Dict[str, Any]) -> None:
        click.echo(json.dumps(payload, indent=2))

    def render_success(self, data: BaseModel) -> None:
        self._emit({
            "command": self.command,
            "status": "success",
            "data": data.model_dump(mode="json"),
        })

    def render_error(self, error: Exception) -> None:
        self._emit({
            "command": self.command,
            "status": "error",
            "error": {"type": type(error).__name__, "message": str(error)},
        })
