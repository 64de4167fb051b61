import pytest

from iku.errors import IkuInternalError
from iku.types.scopes import Scopes


@pytest.fixture
def scopes():
    s = Scopes()
    s.enter(nested=False)
    return s


def test_get_missing_name(scopes):
    assert scopes.get("x") is None


def test_create_and_get(scopes):
    scopes.create("x", 1)
    assert scopes.get("x") == 1


def test_nested_scope_sees_parent(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=True)
    assert scopes.get("x") == 1


def test_detached_scope_hides_parent(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=False)
    assert scopes.get("x") is None
    scopes.exit()
    assert scopes.get("x") == 1


def test_lookup_stops_at_first_detached_scope(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=False)
    scopes.create("y", 2)
    scopes.enter(nested=True)
    scopes.enter(nested=True)
    assert scopes.get("y") == 2
    assert scopes.get("x") is None


def test_create_shadows_outer_binding(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=True)
    scopes.create("x", 2)
    assert scopes.get("x") == 2
    scopes.exit()
    assert scopes.get("x") == 1


def test_set_mutates_nearest_binding(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=True)
    assert scopes.set("x", 5) is True
    scopes.exit()
    assert scopes.get("x") == 5


def test_set_does_not_cross_detached_boundary(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=False)
    assert scopes.set("x", 5) is False
    scopes.exit()
    assert scopes.get("x") == 1


def test_set_does_not_create(scopes):
    assert scopes.set("x", 5) is False
    assert scopes.get("x") is None


def test_falsy_values_are_found(scopes):
    scopes.create("f", False)
    scopes.create("z", 0)
    scopes.create("u", ())
    assert scopes.get("f") is False
    assert scopes.get("z") == 0
    assert scopes.get("u") == ()


def test_create_without_scope_is_an_internal_error():
    with pytest.raises(IkuInternalError):
        Scopes().create("x", 1)


def test_exit_without_scope_is_an_internal_error():
    with pytest.raises(IkuInternalError):
        Scopes().exit()


def test_scope_context_manager_balances_enter_and_exit(scopes):
    with scopes.scope(nested=True) as inner:
        scopes.create("x", 1)
        assert inner.vars == {"x": 1}
        assert scopes.depth == 2
    assert scopes.depth == 1
    assert scopes.get("x") is None


def test_scope_context_manager_exits_on_error(scopes):
    with pytest.raises(ValueError):
        with scopes.scope(nested=False):
            raise ValueError("boom")
    assert scopes.depth == 1


def test_repr_lists_scopes_top_down(scopes):
    scopes.create("x", 1)
    scopes.enter(nested=True)
    assert repr(scopes) == "<Scopes: nested{} -> detached{x: 1}>"
