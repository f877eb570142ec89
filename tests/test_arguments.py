import pytest

from nwd.core.arguments import index_of_callable, replace_callback_with_return_self, return_self, split_callback
from nwd.core.errors import CallerMisuseError


def _recorder():
    calls = []

    def callback(*args):
        calls.append(args)

    return callback, calls


def test_index_of_callable_finds_first_function():
    callback, _ = _recorder()

    assert index_of_callable(["left", callback]) == 1
    assert index_of_callable([callback]) == 0
    assert index_of_callable([1, {"x": 1}]) == -1
    assert index_of_callable([]) == -1


def test_return_self_substitutes_success_value():
    callback, calls = _recorder()
    marker = object()

    return_self(callback, marker)(None, "raw result")

    assert calls == [(None, marker)]


def test_return_self_forwards_error():
    callback, calls = _recorder()
    error = RuntimeError("boom")

    return_self(callback, object())(error)

    assert calls == [(error,)]


def test_nested_wrapping_composes():
    callback, calls = _recorder()
    inner, outer = object(), object()

    wrapped = return_self(return_self(callback, inner), outer)
    wrapped(None, "raw")

    assert calls == [(None, inner)]


def test_replace_callback_preserves_positions():
    callback, calls = _recorder()
    marker = object()
    args = ("left", callback)

    rewritten = replace_callback_with_return_self(args, marker)

    assert rewritten[0] == "left"
    assert rewritten[1] is not callback
    assert args[1] is callback
    rewritten[1](None, 42)
    assert calls == [(None, marker)]


def test_replace_callback_without_callable_is_unchanged():
    assert replace_callback_with_return_self(["left", 1], object()) == ["left", 1]


def test_split_callback_fills_defaults():
    callback, _ = _recorder()

    assert split_callback([callback], defaults=("left",)) == (["left"], callback)
    assert split_callback(["right", callback], defaults=("left",)) == (["right"], callback)


def test_split_callback_with_required_params():
    callback, _ = _recorder()

    params, found = split_callback(["#id", callback], required=1, defaults=(None,))

    assert params == ["#id", None]
    assert found is callback


def test_split_callback_ignores_arguments_after_callback():
    callback, _ = _recorder()

    assert split_callback(["name", callback, "extra"], required=1) == (["name"], callback)


def test_split_callback_requires_callable():
    with pytest.raises(CallerMisuseError):
        split_callback(["left"], defaults=("left",))


def test_split_callback_rejects_wrong_arity():
    callback, _ = _recorder()

    with pytest.raises(CallerMisuseError):
        split_callback([callback], required=1)
    with pytest.raises(CallerMisuseError):
        split_callback(["a", "b", callback], defaults=(None,))
