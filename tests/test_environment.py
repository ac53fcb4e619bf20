import pytest

from environment import Environment
from errors import DuplicateDefinitionError, UndefinedVariableError


def test_define_and_get():
    env = Environment()
    env.define("a", 1.0)
    assert env.get("a") == 1.0


def test_define_twice_in_same_scope_fails():
    env = Environment()
    env.define("a", 1.0)
    with pytest.raises(DuplicateDefinitionError):
        env.define("a", 2.0)


def test_shadowing_in_child_scope_is_allowed():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.define("a", 2.0)
    assert inner.get("a") == 2.0
    assert outer.get("a") == 1.0


def test_get_searches_enclosing_scopes():
    outer = Environment()
    outer.define("a", None)
    inner = Environment(Environment(outer))
    assert inner.get("a") is None


def test_get_undefined_fails():
    with pytest.raises(UndefinedVariableError) as exc:
        Environment(Environment()).get("missing")
    assert exc.value.name == "missing"


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define("a", 1.0)
    middle = Environment(outer)
    middle.define("a", 2.0)
    inner = Environment(middle)

    assert inner.assign("a", 3.0) == 3.0
    assert middle.get("a") == 3.0
    assert outer.get("a") == 1.0


def test_assign_never_creates_a_binding():
    env = Environment()
    with pytest.raises(UndefinedVariableError):
        env.assign("a", 1.0)
    with pytest.raises(UndefinedVariableError):
        env.get("a")


def test_repr_lists_names_in_scope():
    env = Environment()
    env.define("b", 1.0)
    env.define("a", 2.0)
    assert repr(env) == "Environment(['a', 'b'])"
