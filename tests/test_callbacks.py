import asyncio
import gc
from unittest.mock import AsyncMock

import pytest

from fakes import FakeDriver
from nwd.core import callbacks
from nwd.core.callbacks import CallbackElement
from nwd.core.element import WebElement
from nwd.core.errors import CallerMisuseError, InvalidElementStateError, StaleElementReferenceError


def _facade(driver: FakeDriver | None = None) -> CallbackElement:
    return CallbackElement(WebElement("el-1", driver or FakeDriver()))


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.done = asyncio.Event()

    def __call__(self, *args) -> None:
        self.calls.append(args)
        self.done.set()

    async def wait(self) -> tuple:
        await asyncio.wait_for(self.done.wait(), timeout=1)
        return self.calls[0]


@pytest.mark.asyncio
async def test_click_hands_back_the_same_facade():
    facade = _facade()
    callback = Recorder()

    facade.click(callback)

    err, result = await callback.wait()
    assert err is None
    assert result is facade
    assert len(callback.calls) == 1


@pytest.mark.asyncio
async def test_error_is_first_callback_argument():
    driver = FakeDriver()
    error = StaleElementReferenceError("gone")
    driver.respond("/element/el-1/click", error)
    callback = Recorder()

    _facade(driver).click(callback)

    assert await callback.wait() == (error,)


@pytest.mark.asyncio
async def test_omitted_optional_parameter_matches_default():
    implicit, explicit = _facade(), _facade()
    first, second = Recorder(), Recorder()

    implicit.mouse_down(first)
    explicit.mouse_down(None, second)
    await first.wait()
    await second.wait()

    assert implicit.driver.events == explicit.driver.events == [("cmd", "/moveto"), ("mouse_down", None)]


@pytest.mark.asyncio
async def test_mouse_up_with_button():
    facade = _facade()
    callback = Recorder()

    facade.mouse_up("middle", callback)

    assert await callback.wait() == (None, facade)
    assert facade.driver.events[-1] == ("mouse_up", "middle")


@pytest.mark.asyncio
async def test_send_keys_with_clear_params_short_circuits():
    driver = FakeDriver()
    driver.respond("/element/el-1/clear", InvalidElementStateError("read only"))
    callback = Recorder()

    _facade(driver).send_keys("text", {"clear": True}, callback)

    err, = await callback.wait()
    assert isinstance(err, InvalidElementStateError)
    assert [c.path for c in driver.commands] == ["/element/el-1/clear"]


@pytest.mark.asyncio
async def test_move_to_accepts_offset_dict():
    facade = _facade()
    callback = Recorder()

    facade.move_to({"x": 1, "y": 2}, callback)

    assert await callback.wait() == (None, facade)
    assert facade.driver.commands[0].data == {"element": "el-1", "xoffset": 1, "yoffset": 2}


@pytest.mark.asyncio
async def test_query_delivers_raw_value():
    driver = FakeDriver()
    driver.respond("/element/el-1/attribute/href", "/home")
    callback = Recorder()

    _facade(driver).get_attr("href", callback)

    assert await callback.wait() == (None, "/home")


@pytest.mark.asyncio
async def test_bridge_method_delivers_raw_value():
    driver = FakeDriver(script_results=["block"])
    callback = Recorder()

    _facade(driver).css("display", callback)

    assert await callback.wait() == (None, "block")
    assert driver.scripts[0][0] == 'return $(arguments[0]).css("display");'


@pytest.mark.asyncio
async def test_scoped_lookup_wraps_results():
    facade = _facade()
    callback = Recorder()

    facade.get_list("li", {"using": "tag name"}, callback)

    err, children = await callback.wait()
    assert err is None
    assert [type(child) for child in children] == [CallbackElement, CallbackElement]
    assert facade.driver.lookups == [("get_list", "li", "tag name", facade.element)]


@pytest.mark.asyncio
async def test_wait_for_detach_delivers_session():
    driver = FakeDriver()
    driver.respond("/element/el-1/name", StaleElementReferenceError("gone"))
    callback = Recorder()

    _facade(driver).wait_for_detach(callback)

    assert await callback.wait() == (None, driver)


@pytest.mark.asyncio
async def test_missing_callback_raises_synchronously():
    facade = _facade()

    with pytest.raises(CallerMisuseError):
        facade.click()
    with pytest.raises(CallerMisuseError):
        facade.get_attr("href")

    assert facade.driver.commands == []


@pytest.mark.asyncio
async def test_dropped_task_still_delivers():
    facade = _facade()
    callback = Recorder()

    facade.click(callback)
    gc.collect()

    assert await callback.wait() == (None, facade)
    await asyncio.sleep(0)
    assert not callbacks._pending


@pytest.mark.asyncio
async def test_wait_for_element_reads_search_params():
    facade = _facade()
    child = WebElement("child-9", facade.driver)
    facade.element.wait_for_element = AsyncMock(return_value=child)
    callback = Recorder()

    facade.wait_for_element("#late", {"timeout": 250, "parent": object()}, callback)

    err, found = await callback.wait()
    assert err is None
    assert found.element is child
    facade.element.wait_for_element.assert_awaited_once_with("#late", using=None, timeout_ms=250)


@pytest.mark.asyncio
async def test_unknown_search_param_reaches_callback():
    facade = _facade()
    callback = Recorder()

    facade.get(".item", {"usng": "xpath"}, callback)

    err, = await callback.wait()
    assert isinstance(err, ValueError)
    assert facade.driver.lookups == []
