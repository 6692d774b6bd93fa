import pytest

from jqtree.stack import ScopeStack, Stack


def _drain(stack):
    out = []
    while not stack.empty():
        out.append(stack.pop())
    return out


def test_new_stack_is_empty():
    assert Stack().empty() is True


def test_new_scope_stack_is_empty():
    assert ScopeStack().empty() is True


def test_stack_push_pop_lifo():
    stack = Stack()
    for v in ("a", "b", "c"):
        stack.push(v)
    assert stack.empty() is False
    assert _drain(stack) == ["c", "b", "a"]
    assert stack.empty() is True


def test_scope_stack_push_pop_lifo():
    stack = ScopeStack()
    for v in ("a", "b", "c"):
        stack.push(v)
    assert stack.empty() is False
    assert _drain(stack) == ["c", "b", "a"]
    assert stack.empty() is True


def test_stack_pop_empty_raises():
    with pytest.raises(IndexError):
        Stack().pop()


def test_scope_stack_pop_empty_raises():
    with pytest.raises(IndexError):
        ScopeStack().pop()


def test_top_does_not_remove():
    s = Stack()
    s.push("x")
    s.push("y")
    assert s.top() == "y"
    assert s.top() == "y"
    assert s.pop() == "y"
    assert s.top() == "x"


def test_top_empty_raises():
    with pytest.raises(IndexError):
        Stack().top()


def test_stack_restore_brings_back_popped_values():
    stack = Stack()
    stack.push("a")
    stack.push("b")
    saved = stack.save()
    assert stack.pop() == "b"
    stack.push("c")
    assert _drain(stack) == ["c", "a"]
    stack.restore(*saved)
    assert _drain(stack) == ["b", "a"]


def test_scope_stack_restore_brings_back_popped_values():
    stack = ScopeStack()
    stack.push("a")
    stack.push("b")
    saved = stack.save()
    assert stack.pop() == "b"
    stack.push("c")
    assert _drain(stack) == ["c", "a"]
    stack.restore(*saved)
    assert _drain(stack) == ["b", "a"]


def test_stack_nested_save_restore():
    stack = Stack()
    stack.push("a")
    outer = stack.save()
    stack.push("b")
    inner = stack.save()
    assert _drain(stack) == ["b", "a"]
    stack.push("z")
    stack.restore(*inner)
    assert stack.pop() == "b"
    stack.restore(*outer)
    assert _drain(stack) == ["a"]


def test_scope_stack_nested_save_restore():
    stack = ScopeStack()
    stack.push("a")
    outer = stack.save()
    stack.push("b")
    inner = stack.save()
    assert _drain(stack) == ["b", "a"]
    stack.push("z")
    stack.restore(*inner)
    assert stack.pop() == "b"
    stack.restore(*outer)
    assert _drain(stack) == ["a"]


def test_stack_save_on_empty_then_restore():
    stack = Stack()
    saved = stack.save()
    stack.push("a")
    stack.restore(*saved)
    assert stack.empty() is True


def test_scope_stack_save_on_empty_then_restore():
    stack = ScopeStack()
    saved = stack.save()
    stack.push("a")
    stack.restore(*saved)
    assert stack.empty() is True


def test_stack_save_returns_restorable_point():
    stack = Stack()
    stack.push("a")
    first = stack.save()
    second = stack.save()
    stack.pop()
    stack.restore(*second)
    assert stack.pop() == "a"
    stack.restore(*first)
    assert stack.pop() == "a"


def test_scope_stack_save_returns_restorable_point():
    stack = ScopeStack()
    stack.push("a")
    first = stack.save()
    second = stack.save()
    stack.pop()
    stack.restore(*second)
    assert stack.pop() == "a"
    stack.restore(*first)
    assert stack.pop() == "a"