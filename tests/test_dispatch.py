"""Tests for browser_tools.dispatch.Dispatcher."""
import base64
import json
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from browser_tools import CATALOG, BrowserSession, Dispatcher, to_result
from browser_tools.types import EmbeddedResource, ImageContent, TextContent

from tests.conftest import PDF_BYTES, PNG_BYTES

VALID_ARGS = {
    "navigate": {"url": "https://example.com"},
    "screenshot": {},
    "click": {"selector": "#go"},
    "fill": {"selector": "#q", "value": "hello"},
    "select": {"selector": "select#size", "value": "m"},
    "hover": {"selector": ".menu"},
    "evaluate": {"script": "1 + 1"},
    "get_content": {},
    "get_text": {"selector": "h1"},
    "get_attribute": {"selector": "a", "attribute": "href"},
    "wait_for_selector": {"selector": "#ready"},
    "wait_for_timeout": {"timeout": 10},
    "press_key": {"key": "Enter"},
    "type_text": {"selector": "#q", "text": "abc"},
    "check": {"selector": "#agree"},
    "uncheck": {"selector": "#agree"},
    "get_title": {},
    "get_url": {},
    "go_back": {},
    "go_forward": {},
    "reload": {},
    "get_cookies": {},
    "set_cookie": {"name": "sid", "value": "abc"},
    "delete_cookies": {},
    "pdf": {},
    "is_visible": {"selector": "#x"},
    "is_enabled": {"selector": "#x"},
    "is_checked": {"selector": "#x"},
    "count_elements": {"selector": "li"},
    "set_viewport": {"width": 1280, "height": 800},
}


def _text(result) -> str:
    assert len(result.content) >= 1
    return result.content[0].text


def test_valid_args_cover_catalog():
    assert set(VALID_ARGS) == {d.name for d in CATALOG.list()}


@pytest.mark.parametrize("tool", list(VALID_ARGS))
def test_every_tool_succeeds_with_valid_args(dispatcher, tool):
    result = dispatcher.execute(tool, VALID_ARGS[tool])
    assert result.is_error is False, result
    assert len(result.content) >= 1


@pytest.mark.parametrize("tool", [d.name for d in CATALOG.list() if d.required])
def test_missing_required_argument_is_envelope(dispatcher, launcher, tool):
    result = dispatcher.execute(tool, {})
    assert result.is_error is True
    assert len(result.content) == 1
    assert _text(result).startswith("Missing required argument: ")
    launcher.assert_not_called()


class TestValidation:
    def test_unknown_tool(self, dispatcher, launcher):
        result = dispatcher.execute("does-not-exist", {})
        assert result.is_error is True
        assert _text(result) == "Unknown tool: does-not-exist"
        launcher.assert_not_called()

    def test_no_arguments_for_tool_with_required_params(self, dispatcher):
        result = dispatcher.execute("click", None)
        assert result.is_error is True
        assert _text(result) == "Arguments are required for tool execution"

    def test_no_arguments_for_tool_without_params(self, dispatcher):
        result = dispatcher.execute("get_title", None)
        assert result.is_error is False
        assert _text(result) == "Example Domain"

    def test_bad_type_is_envelope(self, dispatcher):
        result = dispatcher.execute("set_viewport", {"width": "wide", "height": 600})
        assert result.is_error is True
        assert "'width' must be a number" in _text(result)

    def test_disabled_tool_is_unknown(self, session):
        dispatcher = Dispatcher(session, CATALOG.without(["evaluate"]))
        result = dispatcher.execute("evaluate", {"script": "1"})
        assert _text(result) == "Unknown tool: evaluate"
        assert "evaluate" not in [d.name for d in dispatcher.catalog.list()]


class TestResults:
    def test_navigate(self, dispatcher, page):
        result = dispatcher.execute("navigate", {"url": "https://example.com"})
        page.goto.assert_called_once_with("https://example.com", wait_until="networkidle")
        assert _text(result) == "Successfully navigated to https://example.com"

    def test_screenshot_full_page(self, dispatcher, page):
        result = dispatcher.execute("screenshot", {"fullPage": True, "name": "home"})
        page.screenshot.assert_called_once_with(full_page=True, type="png")
        text, image = result.content
        assert text.text == "Screenshot taken: home.png"
        assert isinstance(image, ImageContent)
        assert image.mime_type == "image/png"
        assert len(base64.b64decode(image.data)) > 0
        assert base64.b64decode(image.data) == PNG_BYTES

    def test_screenshot_defaults(self, dispatcher, page):
        result = dispatcher.execute("screenshot", {})
        page.screenshot.assert_called_once_with(full_page=False, type="png")
        assert result.content[0].text == "Screenshot taken: screenshot.png"

    def test_pdf_resource(self, dispatcher):
        result = dispatcher.execute("pdf", {})
        text, resource = result.content
        assert text.text == "PDF generated: page.pdf"
        assert isinstance(resource, EmbeddedResource)
        assert resource.resource.mime_type == "application/pdf"
        assert base64.b64decode(resource.resource.blob) == PDF_BYTES
        assert resource.resource.uri.startswith("data:application/pdf;base64,")

    def test_get_title_after_navigate(self, dispatcher):
        dispatcher.execute("navigate", {"url": "https://example.com"})
        assert _text(dispatcher.execute("get_title", {})) == "Example Domain"

    def test_get_text_no_match_is_empty(self, dispatcher, page):
        page.query_selector.return_value = None
        result = dispatcher.execute("get_text", {"selector": ".missing"})
        assert result.is_error is False
        assert _text(result) == ""

    def test_get_attribute_missing_attribute_is_empty(self, dispatcher, page):
        page.query_selector.return_value.get_attribute.return_value = None
        result = dispatcher.execute("get_attribute", {"selector": "a", "attribute": "data-x"})
        assert result.is_error is False
        assert _text(result) == ""

    def test_get_attribute(self, dispatcher):
        assert _text(dispatcher.execute("get_attribute", {"selector": "a", "attribute": "href"})) == "/next"

    def test_booleans_are_textualised(self, dispatcher):
        assert _text(dispatcher.execute("is_visible", {"selector": "#x"})) == "true"
        assert _text(dispatcher.execute("is_checked", {"selector": "#x"})) == "false"

    def test_count(self, dispatcher, page):
        assert _text(dispatcher.execute("count_elements", {"selector": "li"})) == "3"
        page.locator.assert_called_with("li")

    def test_evaluate(self, dispatcher, page):
        result = dispatcher.execute("evaluate", {"script": "({answer: 42})"})
        page.evaluate.assert_called_once_with("async script => JSON.stringify(await eval(script))", "({answer: 42})")
        assert _text(result) == 'Script executed. Result: {"answer":42}'

    def test_evaluate_undefined_and_null(self, dispatcher, page):
        page.evaluate.return_value = None
        assert _text(dispatcher.execute("evaluate", {"script": "void 0"})) == "Script executed. Result: undefined"
        page.evaluate.return_value = "null"
        assert _text(dispatcher.execute("evaluate", {"script": "null"})) == "Script executed. Result: null"

    def test_wait_for_selector_default_timeout(self, dispatcher, page):
        dispatcher.execute("wait_for_selector", {"selector": "#ready"})
        page.wait_for_selector.assert_called_once_with("#ready", timeout=30000.0)

    def test_press_key_with_and_without_selector(self, dispatcher, page):
        dispatcher.execute("press_key", {"key": "Enter"})
        page.keyboard.press.assert_called_once_with("Enter")
        dispatcher.execute("press_key", {"key": "Tab", "selector": "#q"})
        page.press.assert_called_once_with("#q", "Tab")

    def test_type_text_delay(self, dispatcher, page):
        dispatcher.execute("type_text", {"selector": "#q", "text": "abc", "delay": 25})
        page.type.assert_called_once_with("#q", "abc", delay=25.0)

    def test_get_cookies_json(self, dispatcher):
        assert json.loads(_text(dispatcher.execute("get_cookies", {}))) == [{"name": "sid", "value": "abc"}]

    def test_set_cookie_uses_page_url(self, dispatcher, page):
        dispatcher.execute("set_cookie", {"name": "sid", "value": "abc"})
        page.context.add_cookies.assert_called_once_with(
            [{"name": "sid", "value": "abc", "url": "https://example.com/"}]
        )

    def test_set_cookie_with_domain(self, dispatcher, page):
        result = dispatcher.execute("set_cookie", {"name": "sid", "value": "abc", "domain": ".example.com"})
        page.context.add_cookies.assert_called_once_with(
            [{"name": "sid", "value": "abc", "domain": ".example.com", "path": "/"}]
        )
        assert _text(result) == "Cookie sid set"

    def test_set_viewport(self, dispatcher, page):
        result = dispatcher.execute("set_viewport", {"width": "1024", "height": 768})
        page.set_viewport_size.assert_called_once_with({"width": 1024, "height": 768})
        assert _text(result) == "Viewport set to 1024x768"


class TestFailures:
    def test_playwright_error_first_line(self, dispatcher, page):
        page.click.side_effect = PlaywrightError("Page.click: Timeout 30000ms exceeded.\nCall log:\n  - waiting for #nope")
        result = dispatcher.execute("click", {"selector": "#nope"})
        assert result.is_error is True
        assert len(result.content) == 1
        assert _text(result) == "Page.click: Timeout 30000ms exceeded."

    def test_timeout_error(self, dispatcher, page):
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 5ms exceeded.")
        result = dispatcher.execute("wait_for_selector", {"selector": "#late", "timeout": 5})
        assert result.is_error is True
        assert _text(result) == "Timeout 5ms exceeded."

    def test_navigation_failure_message(self, dispatcher, page):
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED at https://nope.invalid/")
        result = dispatcher.execute("navigate", {"url": "https://nope.invalid/"})
        assert result.is_error is True
        assert _text(result) == "Navigation failed: net::ERR_NAME_NOT_RESOLVED at https://nope.invalid/"

    def test_unexpected_exception(self, dispatcher, page):
        page.title.side_effect = KeyError("boom")
        result = dispatcher.execute("get_title", {})
        assert result.is_error is True
        assert _text(result) == "KeyError: 'boom'"

    def test_session_unavailable_then_recovers(self, browser, driver):
        launcher = MagicMock(side_effect=[RuntimeError("Executable doesn't exist"), (browser, driver)])
        dispatcher = Dispatcher(BrowserSession(launcher=launcher))
        result = dispatcher.execute("get_url", {})
        assert result.is_error is True
        assert _text(result) == "Browser launch failed: Executable doesn't exist"
        assert dispatcher.execute("get_url", {}).is_error is False
        dispatcher.session.close()

    def test_failure_does_not_close_session(self, dispatcher, page, launcher):
        page.click.side_effect = PlaywrightError("nope")
        dispatcher.execute("click", {"selector": "#a"})
        assert dispatcher.execute("get_url", {}).is_error is False
        launcher.assert_called_once()
        page.close.assert_not_called()


class TestToResult:
    def test_wraps_kinds(self):
        assert to_result("x").content == [TextContent(text="x")]
        assert to_result(True).content == [TextContent(text="true")]
        assert to_result(0).content == [TextContent(text="0")]
        assert to_result(None).content == [TextContent(text="")]
        block = TextContent(text="y")
        assert to_result(block).content == [block]
        assert to_result([block, block]).content == [block, block]

    def test_wire_shape(self):
        wire = to_result([TextContent(text="a"), ImageContent(data="AA==", mime_type="image/png")]).to_wire()
        assert wire == {
            "content": [
                {"type": "text", "text": "a"},
                {"type": "image", "data": "AA==", "mimeType": "image/png"},
            ],
            "isError": False,
        }
