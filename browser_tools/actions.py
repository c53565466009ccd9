"""
Browser tools: one handler per tool, each running a single primitive on the shared page.

Handlers return plain values (str, bool, int) or a list of content blocks;
the dispatcher turns them into a ToolResult.
"""
import json

from playwright.sync_api import Error as PlaywrightError

from browser_tools.registry import Catalog, Param, as_bool, as_float, as_int, as_str
from browser_tools.types import TextContent, image_block, resource_block

CATALOG = Catalog()

# Stringified in the page so undefined and null stay distinct
_EVAL_JS = "async script => JSON.stringify(await eval(script))"


def _selector(description: str = "CSS selector for the element") -> Param:
    return Param("selector", "string", description, required=True)


# --- Navigation ---

@CATALOG.tool(
    "navigate",
    "Navigate to a URL in the browser",
    Param("url", "string", "The URL to navigate to", required=True),
)
def navigate(page, args: dict) -> str:
    url = as_str(args, "url")
    try:
        page.goto(url, wait_until="networkidle")
    except PlaywrightError as e:
        raise PlaywrightError(f"Navigation failed: {e}") from e
    return f"Successfully navigated to {url}"


@CATALOG.tool(
    "screenshot",
    "Take a screenshot of the current page",
    Param("name", "string", "Name for the screenshot file", default="screenshot"),
    Param("fullPage", "boolean", "Whether to take a full page screenshot", default=False),
)
def screenshot(page, args: dict) -> list:
    name = as_str(args, "name") or "screenshot"
    buf = page.screenshot(full_page=as_bool(args, "fullPage"), type="png")
    return [TextContent(text=f"Screenshot taken: {name}.png"), image_block(buf, "image/png")]


# --- Interaction ---

@CATALOG.tool("click", "Click an element on the page", _selector("CSS selector for the element to click"))
def click(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.click(selector)
    return f"Clicked element: {selector}"


@CATALOG.tool(
    "fill",
    "Fill a form field with text",
    _selector("CSS selector for the input field"),
    Param("value", "string", "Text to fill in the field", required=True),
)
def fill(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.fill(selector, as_str(args, "value"))
    # Value is not echoed back (may be a password)
    return f"Filled {selector} with value"


@CATALOG.tool(
    "select",
    "Select an option from a dropdown",
    _selector("CSS selector for the select element"),
    Param("value", "string", "Value to select", required=True),
)
def select(page, args: dict) -> str:
    selector, value = as_str(args, "selector"), as_str(args, "value")
    page.select_option(selector, value)
    return f"Selected {value} in {selector}"


@CATALOG.tool("hover", "Hover over an element", _selector("CSS selector for the element to hover"))
def hover(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.hover(selector)
    return f"Hovered over {selector}"


@CATALOG.tool(
    "evaluate",
    "Execute JavaScript code in the browser context",
    Param("script", "string", "JavaScript code to execute", required=True),
)
def evaluate(page, args: dict) -> str:
    # Runs with full page privileges; disable with ALLOW_EVALUATE=0
    text = page.evaluate(_EVAL_JS, as_str(args, "script"))
    # JSON.stringify gives undefined (None here) for undefined and functions
    return f"Script executed. Result: {'undefined' if text is None else text}"


# --- Read ---

@CATALOG.tool("get_content", "Get the HTML content of the current page")
def get_content(page, args: dict) -> str:
    return page.content()


@CATALOG.tool("get_text", "Get the text content of an element", _selector())
def get_text(page, args: dict) -> str:
    element = page.query_selector(as_str(args, "selector"))
    if element is None:
        return ""
    return element.text_content() or ""


@CATALOG.tool(
    "get_attribute",
    "Get an attribute value from an element",
    _selector(),
    Param("attribute", "string", "Attribute name to get", required=True),
)
def get_attribute(page, args: dict) -> str:
    element = page.query_selector(as_str(args, "selector"))
    if element is None:
        return ""
    return element.get_attribute(as_str(args, "attribute")) or ""


# --- Wait ---

@CATALOG.tool(
    "wait_for_selector",
    "Wait for an element to appear on the page",
    _selector("CSS selector to wait for"),
    Param("timeout", "number", "Timeout in milliseconds", default=30000),
)
def wait_for_selector(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.wait_for_selector(selector, timeout=as_float(args, "timeout"))
    return f"Element {selector} appeared"


@CATALOG.tool(
    "wait_for_timeout",
    "Wait for a specified amount of time",
    Param("timeout", "number", "Time to wait in milliseconds", required=True),
)
def wait_for_timeout(page, args: dict) -> str:
    timeout = as_float(args, "timeout")
    page.wait_for_timeout(timeout)
    return f"Waited {args['timeout']}ms"


# --- Keyboard ---

@CATALOG.tool(
    "press_key",
    "Press a keyboard key",
    Param("selector", "string", "CSS selector for the element (optional, uses page if not provided)"),
    Param("key", "string", "Key to press (e.g., 'Enter', 'ArrowDown', 'a')", required=True),
)
def press_key(page, args: dict) -> str:
    key = as_str(args, "key")
    if args.get("selector"):
        page.press(as_str(args, "selector"), key)
    else:
        page.keyboard.press(key)
    return f"Pressed key: {key}"


@CATALOG.tool(
    "type_text",
    "Type text character by character (simulates real typing)",
    _selector("CSS selector for the input field"),
    Param("text", "string", "Text to type", required=True),
    Param("delay", "number", "Delay between key presses in milliseconds", default=0),
)
def type_text(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.type(selector, as_str(args, "text"), delay=as_float(args, "delay"))
    return f"Typed text into {selector}"


# --- Forms ---

@CATALOG.tool("check", "Check a checkbox or radio button", _selector("CSS selector for the checkbox/radio"))
def check(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.check(selector)
    return f"Checked {selector}"


@CATALOG.tool("uncheck", "Uncheck a checkbox", _selector("CSS selector for the checkbox"))
def uncheck(page, args: dict) -> str:
    selector = as_str(args, "selector")
    page.uncheck(selector)
    return f"Unchecked {selector}"


# --- Page info & history ---

@CATALOG.tool("get_title", "Get the page title")
def get_title(page, args: dict) -> str:
    return page.title()


@CATALOG.tool("get_url", "Get the current page URL")
def get_url(page, args: dict) -> str:
    return page.url


@CATALOG.tool("go_back", "Navigate back in browser history")
def go_back(page, args: dict) -> str:
    page.go_back()
    return "Navigated back"


@CATALOG.tool("go_forward", "Navigate forward in browser history")
def go_forward(page, args: dict) -> str:
    page.go_forward()
    return "Navigated forward"


@CATALOG.tool("reload", "Reload the current page")
def reload(page, args: dict) -> str:
    page.reload()
    return "Page reloaded"


# --- Cookies ---

@CATALOG.tool("get_cookies", "Get all cookies for the current page")
def get_cookies(page, args: dict) -> str:
    return json.dumps(page.context.cookies(), indent=2)


@CATALOG.tool(
    "set_cookie",
    "Set a cookie",
    Param("name", "string", "Cookie name", required=True),
    Param("value", "string", "Cookie value", required=True),
    Param("domain", "string", "Cookie domain (optional)"),
    Param("path", "string", "Cookie path (optional)"),
)
def set_cookie(page, args: dict) -> str:
    name = as_str(args, "name")
    cookie = {"name": name, "value": as_str(args, "value")}
    # Playwright wants either a url or a domain/path pair, not both
    if args.get("domain"):
        cookie["domain"] = as_str(args, "domain")
        cookie["path"] = as_str(args, "path") if args.get("path") else "/"
    else:
        cookie["url"] = page.url
        if args.get("path"):
            cookie["path"] = as_str(args, "path")
    page.context.add_cookies([cookie])
    return f"Cookie {name} set"


@CATALOG.tool("delete_cookies", "Delete all cookies")
def delete_cookies(page, args: dict) -> str:
    page.context.clear_cookies()
    return "All cookies deleted"


# --- Export ---

@CATALOG.tool(
    "pdf",
    "Generate a PDF of the current page",
    Param("name", "string", "PDF filename", default="page.pdf"),
)
def pdf(page, args: dict) -> list:
    name = as_str(args, "name") or "page.pdf"
    buf = page.pdf(format="A4")
    return [TextContent(text=f"PDF generated: {name}"), resource_block(buf, "application/pdf")]


# --- Element state ---

@CATALOG.tool("is_visible", "Check if an element is visible", _selector())
def is_visible(page, args: dict) -> bool:
    return page.is_visible(as_str(args, "selector"))


@CATALOG.tool("is_enabled", "Check if an element is enabled", _selector())
def is_enabled(page, args: dict) -> bool:
    return page.is_enabled(as_str(args, "selector"))


@CATALOG.tool("is_checked", "Check if a checkbox or radio button is checked", _selector())
def is_checked(page, args: dict) -> bool:
    return page.is_checked(as_str(args, "selector"))


@CATALOG.tool("count_elements", "Count the number of elements matching a selector", _selector("CSS selector"))
def count_elements(page, args: dict) -> int:
    return page.locator(as_str(args, "selector")).count()


# --- Viewport ---

@CATALOG.tool(
    "set_viewport",
    "Set the browser viewport size",
    Param("width", "number", "Viewport width in pixels", required=True),
    Param("height", "number", "Viewport height in pixels", required=True),
)
def set_viewport(page, args: dict) -> str:
    width, height = as_int(args, "width"), as_int(args, "height")
    page.set_viewport_size({"width": width, "height": height})
    return f"Viewport set to {width}x{height}"
