"""External process helpers."""

from jar_viewer.tools.locator import DecompilerLocator
from jar_viewer.tools.runner import CommandResult, ToolRunner, required_kind_for_command

__all__ = ["CommandResult", "DecompilerLocator", "ToolRunner", "required_kind_for_command"]
