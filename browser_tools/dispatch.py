"""
Dispatcher: (tool, arguments) -> ToolResult.

Every failure below this point becomes an error envelope; nothing is raised
to the transport.
"""
import logging
from collections.abc import Mapping
from typing import Any

from playwright.sync_api import Error as PlaywrightError

from browser_tools.actions import CATALOG
from browser_tools.registry import Catalog, ToolInputError
from browser_tools.session import BrowserSession, SessionUnavailable
from browser_tools.types import EmbeddedResource, ImageContent, TextContent, ToolResult

_log = logging.getLogger(__name__)

_BLOCKS = (TextContent, ImageContent, EmbeddedResource)


def to_result(outcome: Any) -> ToolResult:
    """Wrap a handler's return value by kind: blocks as-is, booleans as true/false, the rest as text."""
    if isinstance(outcome, _BLOCKS):
        return ToolResult(content=[outcome])
    if isinstance(outcome, (list, tuple)) and outcome and all(isinstance(b, _BLOCKS) for b in outcome):
        return ToolResult(content=list(outcome))
    if isinstance(outcome, bool):
        return ToolResult(content=[TextContent(text="true" if outcome else "false")])
    if outcome is None:
        return ToolResult(content=[TextContent(text="")])
    return ToolResult(content=[TextContent(text=str(outcome))])


def _error_message(e: Exception) -> str:
    if isinstance(e, PlaywrightError):
        # Playwright appends a multi-line call log; the first line is the message
        msg = str(e)
        return msg.split("\n")[0] if "\n" in msg else msg
    if isinstance(e, (ToolInputError, SessionUnavailable)):
        return str(e)
    return f"{type(e).__name__}: {e}"


class Dispatcher:
    """Routes tool calls to handlers on the session's page."""

    def __init__(self, session: BrowserSession, catalog: Catalog | None = None):
        self.session = session
        self.catalog = catalog if catalog is not None else CATALOG

    def execute(self, tool: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        entry = self.catalog.get(tool)
        if entry is None:
            return ToolResult.error(f"Unknown tool: {tool}")
        try:
            args = entry.descriptor.bind(arguments)
        except ToolInputError as e:
            return ToolResult.error(str(e))

        _log.debug("Executing tool %s", tool)
        try:
            outcome = self.session.run(entry.handler, args)
        except Exception as e:
            if not isinstance(e, (PlaywrightError, ToolInputError, SessionUnavailable)):
                _log.exception("Tool %s failed unexpectedly", tool)
            else:
                _log.info("Tool %s failed: %s", tool, _error_message(e))
            return ToolResult.error(_error_message(e))
        return to_result(outcome)
