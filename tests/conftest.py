"""Shared fixtures: a fake browser/page behind a real BrowserSession."""
from unittest.mock import MagicMock

import pytest

from browser_tools import BrowserSession, Dispatcher

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF_BYTES = b"%PDF-1.4\n%fake\n"


@pytest.fixture
def page():
    """Page double with return values for the read-style primitives."""
    page = MagicMock(name="page")
    page.url = "https://example.com/"
    page.title.return_value = "Example Domain"
    page.content.return_value = "<html><head><title>Example Domain</title></head><body></body></html>"
    page.screenshot.return_value = PNG_BYTES
    page.pdf.return_value = PDF_BYTES
    page.evaluate.return_value = '{"answer":42}'
    page.is_visible.return_value = True
    page.is_enabled.return_value = True
    page.is_checked.return_value = False
    page.locator.return_value.count.return_value = 3
    page.context.cookies.return_value = [{"name": "sid", "value": "abc"}]
    element = MagicMock(name="element")
    element.text_content.return_value = "Hello"
    element.get_attribute.return_value = "/next"
    page.query_selector.return_value = element
    return page


@pytest.fixture
def browser(page):
    browser = MagicMock(name="browser")
    browser.new_page.return_value = page
    return browser


@pytest.fixture
def driver():
    return MagicMock(name="driver")


@pytest.fixture
def launcher(browser, driver):
    return MagicMock(name="launcher", return_value=(browser, driver))


@pytest.fixture
def session(launcher):
    session = BrowserSession(launcher=launcher)
    yield session
    session.close()


@pytest.fixture
def dispatcher(session):
    return Dispatcher(session)
