"""Command result - uniform success envelope for every command"""

from dataclasses import dataclass
from typing import Any, Dict

from plunge.models.commands import Command


@dataclass(frozen=True)
class CommandResult:
    command: Command
    demo: bool
    success: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """{success, <echoed fields>, demo} - demo only present in demo mode"""
        data: Dict[str, Any] = {"success": self.success, **self.command.echo()}
        if self.demo:
            data["demo"] = True
        return data
