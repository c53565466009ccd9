"""
Browser tools: a fixed catalog of page operations behind one dispatcher.

All tools share one page (see session.BrowserSession):
  Navigation: navigate, go_back, go_forward, reload
  Read: get_content, get_text, get_attribute, get_title, get_url
  Interaction: click, fill, select, hover, press_key, type_text, check, uncheck
  Wait: wait_for_selector, wait_for_timeout
  State: is_visible, is_enabled, is_checked, count_elements
  Cookies: get_cookies, set_cookie, delete_cookies
  Output: screenshot, pdf
  Other: evaluate, set_viewport
"""
from browser_tools.actions import CATALOG
from browser_tools.dispatch import Dispatcher, to_result
from browser_tools.registry import Catalog, Param, ToolDescriptor, ToolInputError
from browser_tools.session import BrowserSession, SessionUnavailable, launch_chromium
from browser_tools.types import (
    EmbeddedResource,
    ImageContent,
    ResourceContents,
    TextContent,
    ToolResult,
)

__all__ = [
    "CATALOG",
    "Catalog",
    "Param",
    "ToolDescriptor",
    "ToolInputError",
    "Dispatcher",
    "to_result",
    "BrowserSession",
    "SessionUnavailable",
    "launch_chromium",
    "TextContent",
    "ImageContent",
    "EmbeddedResource",
    "ResourceContents",
    "ToolResult",
]
