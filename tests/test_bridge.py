import pytest

from fakes import FakeDriver
from nwd.core.bridge import BridgeMethod, HelperRegistry, build_expression
from nwd.core.element import WebElement
from nwd.core.errors import JavaScriptError
from nwd.core.scripts import NEED_HELPER, VISIBILITY_HELPER_SOURCE


def test_build_expression_quotes_arguments():
    assert build_expression(BridgeMethod.CSS, ("display",)) == 'return $(arguments[0]).css("display");'


def test_build_expression_without_arguments():
    assert build_expression(BridgeMethod.TEXT) == "return $(arguments[0]).text();"


def test_build_expression_stringifies_and_escapes():
    assert build_expression(BridgeMethod.ATTR, (5,)) == 'return $(arguments[0]).attr("5");'
    assert build_expression(BridgeMethod.PROP, ('say "hi"',)) == 'return $(arguments[0]).prop("say \\"hi\\"");'


def test_build_expression_enforces_arity():
    with pytest.raises(ValueError):
        build_expression(BridgeMethod.ATTR, ())
    with pytest.raises(ValueError):
        build_expression(BridgeMethod.TEXT, ("extra",))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call, expression",
    [
        (lambda e: e.attr("title"), 'return $(arguments[0]).attr("title");'),
        (lambda e: e.prop("checked"), 'return $(arguments[0]).prop("checked");'),
        (lambda e: e.css("color"), 'return $(arguments[0]).css("color");'),
        (lambda e: e.text(), "return $(arguments[0]).text();"),
    ],
)
async def test_element_bridge_methods_run_expression_against_element(call, expression):
    driver = FakeDriver(script_results=["raw"])
    element = WebElement("el-1", driver)

    assert await call(element) == "raw"
    assert driver.scripts == [(expression, [{"ELEMENT": "el-1"}], False)]


class TestVisibilityCheck:
    @pytest.mark.asyncio
    async def test_helper_installed_once(self):
        driver = FakeDriver(script_results=[NEED_HELPER, True, False, True])
        element = WebElement("el-1", driver)

        assert await element.is_visible() is True
        assert await element.is_visible() is False
        assert await element.is_visible() is True

        with_source = [script for script, _, _ in driver.scripts if VISIBILITY_HELPER_SOURCE in script]
        assert len(driver.scripts) == 4
        assert len(with_source) == 1
        assert VISIBILITY_HELPER_SOURCE not in driver.scripts[0][0]
        assert VISIBILITY_HELPER_SOURCE in driver.scripts[1][0]
        assert driver.helpers.is_installed("___nwdIsVisible")

    @pytest.mark.asyncio
    async def test_no_install_when_page_has_helper(self):
        driver = FakeDriver(script_results=[True])
        element = WebElement("el-1", driver)

        assert await element.is_visible() is True
        assert len(driver.scripts) == 1
        assert not driver.helpers.is_installed("___nwdIsVisible")

    @pytest.mark.asyncio
    async def test_page_reply_wins_over_registry(self):
        driver = FakeDriver(script_results=[NEED_HELPER, True])
        driver.helpers.mark_installed("___nwdIsVisible")
        element = WebElement("el-1", driver)

        assert await element.is_visible() is True
        assert VISIBILITY_HELPER_SOURCE not in driver.scripts[0][0]
        assert VISIBILITY_HELPER_SOURCE in driver.scripts[1][0]
        assert driver.helpers.epoch == 1
        assert driver.helpers.is_installed("___nwdIsVisible")

    @pytest.mark.asyncio
    async def test_check_error_propagates(self):
        driver = FakeDriver(script_results=[JavaScriptError("boom")])
        element = WebElement("el-1", driver)

        with pytest.raises(JavaScriptError):
            await element.is_visible()

    @pytest.mark.asyncio
    async def test_install_state_is_per_session(self):
        first = FakeDriver(script_results=[NEED_HELPER, True])
        second = FakeDriver(script_results=[True])

        await WebElement("a", first).is_visible()
        await WebElement("b", second).is_visible()

        assert first.helpers.is_installed("___nwdIsVisible")
        assert not second.helpers.is_installed("___nwdIsVisible")


def test_registry_reset_starts_new_epoch():
    registry = HelperRegistry()
    registry.mark_installed("helper")

    registry.reset()

    assert registry.epoch == 1
    assert not registry.is_installed("helper")


def test_registry_report_missing_only_resets_known_helpers():
    registry = HelperRegistry()

    registry.report_missing("helper")
    assert registry.epoch == 0

    registry.mark_installed("helper")
    registry.report_missing("helper")
    assert registry.epoch == 1
    assert not registry.is_installed("helper")
