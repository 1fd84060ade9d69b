from __future__ import annotations

import pytest

import functions
from functions.registry import call, declare, function, get_function, is_function_registered, unregister
from script import KeywordArgs, Number, ScriptSyntaxError, String

# What this tests
# - アリティ別シグネチャの解決、名前付き引数の正規化、var_kwargs、未知キーワード/アリティ不一致のエラー。


@pytest.fixture()
def temp_functions():
    names: list[str] = []
    yield names
    for n in names:
        unregister(n)


def test_builtin_functions_are_registered():
    names = functions.list_functions()
    for expected in (
        "sprite_map",
        "sprite",
        "sprite_url",
        "sprite_position",
        "sprite_map_name",
        "sprite_file",
        "sprite_image",
        "image_url",
    ):
        assert expected in names
    assert is_function_registered("sprite-position")
    assert get_function("sprite-position").arities() == [1, 2, 3, 4]


def test_infers_signature_and_binds_named_arguments(temp_functions):
    temp_functions.append("t-pair")

    @function("t-pair")
    def pair(first, second_value):
        return (first, second_value)

    assert call("t-pair", 1, 2) == (1, 2)
    assert call("t_pair", 1, **{"second-value": 2}) == (1, 2)
    assert call("T-PAIR", **{"$first": 1, "$second_value": 2}) == (1, 2)


def test_arity_variants_and_wrong_count(temp_functions):
    temp_functions.append("t-opt")

    @function("t-opt", ("a",), ("a", "b"))
    def opt(a, b="default"):
        return (a, b)

    assert call("t-opt", 1) == (1, "default")
    assert call("t-opt", 1, 2) == (1, 2)
    with pytest.raises(ScriptSyntaxError, match=r"wrong number of arguments \(3 for 1 or 2\) for `t-opt'"):
        call("t-opt", 1, 2, 3)

    declare("t-opt", ("a", "b", "c"))
    declare("t-opt", ("a", "b", "c"))  # 重複は無視
    assert get_function("t-opt").arities() == [1, 2, 3]


def test_unknown_keyword_and_unknown_function(temp_functions):
    temp_functions.append("t-one")

    @function("t-one")
    def one(a):
        return a

    with pytest.raises(ScriptSyntaxError, match=r"doesn't have an argument named \$not-here"):
        call("t-one", 1, **{"not-here": 2})
    with pytest.raises(ScriptSyntaxError, match="Undefined function"):
        call("no-such-function")


def test_var_kwargs_receives_keyword_args(temp_functions):
    temp_functions.append("t-kw")

    @function("t-kw", ("glob",), var_kwargs=True)
    def kw(glob, kwargs):
        return glob, kwargs

    glob, kwargs = call("t-kw", String("x"), **{"my-option": Number(1)})
    assert glob == String("x")
    assert isinstance(kwargs, KeywordArgs)
    assert kwargs.get_var("my_option") == Number(1)
    assert kwargs.get_var("my-option") == Number(1)


def test_registering_non_callable_raises():
    with pytest.raises(TypeError):
        function("t-bad")(42)  # type: ignore[arg-type]
    assert not is_function_registered("t-bad")


def test_duplicate_name_raises(temp_functions):
    temp_functions.append("t-dup")

    @function("t-dup")
    def first():
        return 1

    with pytest.raises(ValueError):

        @function("t_dup")
        def second():
            return 2
