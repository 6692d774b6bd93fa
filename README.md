# jqtree

Building blocks for working with jq-style queries in Python.

## Modules

- `jqtree.query` — the abstract syntax tree of a jq query: `Query`, `Import`,
  `FuncDef`, `Term`, `Unary`, `Pattern`, `PatternObject`, `Index`, `Func`,
  `String`, `Object`, `ObjectKeyVal`, `Array`, `Suffix`, `Bind`, `If`,
  `IfElif`, `Try`, `Reduce`, `Foreach`, `Label`, and the constant values
  `ConstTerm`, `ConstObject`, `ConstObjectKeyVal` and `ConstArray`. All are
  dataclasses.
  - `str(node)` renders any node back to jq source text.
  - `minify()` simplifies a tree in place: a term that is `.`, `..`, `null`,
    `true`, `false` or a call without arguments, and has no suffixes, is
    replaced by that name in the query's `func` field.
  - `to_index_key()` and `to_indices(xs)` extract constant path keys from
    index expressions (names, plain strings, numbers, negated numbers and
    slices); they return `None` when the path is not constant.
  - `ConstTerm.to_value()`, `ConstObject.to_value()` and
    `ConstArray.to_value()` turn constants into plain Python values;
    `ConstTerm.to_string()` returns the string of a string constant, or `None`.
  - Operators in `Query.op` and `Unary.op` are the operator tokens as strings,
    such as `"|"`, `","` or `"-"`.
- `jqtree.term_type` — the `TermType` enumeration of term kinds. Its
  `go_string()` method returns a qualified name such as
  `"jqtree.TermTypeIdentity"`.
- `jqtree.typeof` — `type_of(value)`, which returns the jq type name of a
  Python value.
- `jqtree.stack` — `Stack` and `ScopeStack`, stacks that can save their state
  and later restore it, as backtracking evaluation needs.

## Installation

```
pip install .
```

## Examples

Build a query tree by hand and render it:

```python
from jqtree.query import Query, Term, Index
from jqtree.term_type import TermType

q = Query(term=Term(type=TermType.INDEX, index=Index(name="foo")))
print(str(q))            # .foo
print(q.to_indices([]))  # ['foo']
```

Get jq type names:

```python
from jqtree.typeof import type_of

type_of(None)      # "null"
type_of(True)      # "boolean"
type_of(3.14)      # "number"
type_of("x")       # "string"
type_of([1, 2])    # "array"
type_of({"a": 1})  # "object"
```

`type_of` raises `TypeError` for values that have no jq type.

Use a stack that can be saved and restored:

```python
from jqtree.stack import Stack

s = Stack()
s.push(1)
index, limit = s.save()
s.push(2)
s.pop()            # 2
s.restore(index, limit)
s.top()            # 1
```

`pop()` and `top()` on an empty stack raise `IndexError`.

## What this package does not do

It does not parse jq query text and does not evaluate queries. Syntax trees
are built by constructing the node classes directly; the stacks are provided
for an evaluator to use, but no evaluator is included.

## Running the tests

```
pip install .[test]
pytest
```