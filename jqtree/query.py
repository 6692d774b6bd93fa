"""Abstract syntax tree of jq queries, with printing and minification."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable

from jqtree.term_type import TermType


class _Builder:
    """Accumulates text and remembers the last character written."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def last_char(self) -> str:
        return self._parts[-1][-1] if self._parts else ""

    def getvalue(self) -> str:
        return "".join(self._parts)


def _encode_string(b: _Builder, s: str) -> None:
    b.write(json.dumps(s, ensure_ascii=False))


def _to_number(s: str) -> int | float:
    try:
        return int(s)
    except ValueError:
        return float(s)


def _write_joined(b: _Builder, items: Iterable[Any], sep: str) -> None:
    for i, item in enumerate(items):
        if i:
            b.write(sep)
        item._write_to(b)


def _write_braced(b: _Builder, items: list[Any]) -> None:
    if not items:
        b.write("{}")
        return
    b.write("{ ")
    _write_joined(b, items, ", ")
    b.write(" }")


def _minify(*nodes: Any) -> None:
    for node in nodes:
        if node is not None:
            node.minify()


def _render(node: Any) -> str:
    b = _Builder()
    node._write_to(b)
    return b.getvalue()


@dataclass
class Query:
    """A jq query: a term, a function name, or two queries joined by ``op``.

    ``op`` is the operator token, such as ``"|"`` or ``","``.
    """

    meta: ConstObject | None = None
    imports: list[Import] = field(default_factory=list)
    func_defs: list[FuncDef] = field(default_factory=list)
    term: Term | None = None
    left: Query | None = None
    op: str = ""
    right: Query | None = None
    func: str = ""

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        if self.meta is not None:
            b.write("module ")
            self.meta._write_to(b)
            b.write(";\n")
        for im in self.imports:
            im._write_to(b)
        for fd in self.func_defs:
            fd._write_to(b)
            b.write(" ")
        if self.func:
            b.write(self.func)
        elif self.term is not None:
            self.term._write_to(b)
        elif self.right is not None:
            self.left._write_to(b)
            b.write(", " if self.op == "," else f" {self.op} ")
            self.right._write_to(b)

    def minify(self) -> None:
        """Replace simple terms by function names, recursively."""
        _minify(*self.func_defs)
        if self.term is not None:
            name = self.term.to_func()
            if name:
                self.term = None
                self.func = name
            else:
                self.term.minify()
        elif self.right is not None:
            _minify(self.left, self.right)

    def to_index_key(self) -> Any:
        """Return the constant index key this query denotes, or None."""
        if self.term is None:
            return None
        return self.term.to_index_key()

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Extend ``xs`` with the constant path of this query, or return None."""
        if self.term is None:
            return None
        return self.term.to_indices(xs)


@dataclass
class Import:
    """An ``import`` or ``include`` directive."""

    import_path: str = ""
    import_alias: str = ""
    include_path: str = ""
    meta: ConstObject | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        if self.import_path:
            b.write("import ")
            _encode_string(b, self.import_path)
            b.write(" as ")
            b.write(self.import_alias)
        else:
            b.write("include ")
            _encode_string(b, self.include_path)
        if self.meta is not None:
            b.write(" ")
            self.meta._write_to(b)
        b.write(";\n")


@dataclass
class FuncDef:
    """A function definition."""

    name: str = ""
    args: list[str] = field(default_factory=list)
    body: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write("def " + self.name)
        if self.args:
            b.write("(" + "; ".join(self.args) + ")")
        b.write(": ")
        self.body._write_to(b)
        b.write(";")

    def minify(self) -> None:
        """Minify the function body."""
        _minify(self.body)


_LITERALS = {
    TermType.IDENTITY: ".",
    TermType.RECURSE: "..",
    TermType.NULL: "null",
    TermType.TRUE: "true",
    TermType.FALSE: "false",
}


@dataclass
class Term:
    """A term of a query, followed by its suffixes."""

    type: TermType = TermType.IDENTITY
    index: Index | None = None
    func: Func | None = None
    object: Object | None = None
    array: Array | None = None
    number: str = ""
    unary: Unary | None = None
    format: str = ""
    string: String | None = None
    if_: If | None = None
    try_: Try | None = None
    reduce: Reduce | None = None
    foreach: Foreach | None = None
    label: Label | None = None
    break_: str = ""
    query: Query | None = None
    suffix_list: list[Suffix] = field(default_factory=list)

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        literal = _LITERALS.get(self.type)
        if literal is not None:
            b.write(literal)
        elif self.type == TermType.NUMBER:
            b.write(self.number)
        elif self.type == TermType.FORMAT:
            b.write(self.format)
            if self.string is not None:
                b.write(" ")
                self.string._write_to(b)
        elif self.type == TermType.BREAK:
            b.write("break " + self.break_)
        elif self.type == TermType.QUERY:
            b.write("(")
            self.query._write_to(b)
            b.write(")")
        else:
            child = self._child()
            if child is not None:
                child._write_to(b)
        for suffix in self.suffix_list:
            suffix._write_to(b)

    def _child(self) -> Any:
        match self.type:
            case TermType.INDEX:
                return self.index
            case TermType.FUNC:
                return self.func
            case TermType.OBJECT:
                return self.object
            case TermType.ARRAY:
                return self.array
            case TermType.UNARY:
                return self.unary
            case TermType.FORMAT | TermType.STRING:
                return self.string
            case TermType.IF:
                return self.if_
            case TermType.TRY:
                return self.try_
            case TermType.REDUCE:
                return self.reduce
            case TermType.FOREACH:
                return self.foreach
            case TermType.LABEL:
                return self.label
            case TermType.QUERY:
                return self.query
        return None

    def minify(self) -> None:
        """Minify the nested queries of this term."""
        _minify(self._child(), *self.suffix_list)

    def to_func(self) -> str:
        """Return the function name this term is equivalent to, or ``""``."""
        if self.suffix_list:
            return ""
        if self.type == TermType.FUNC:
            return self.func.to_func()
        return _LITERALS.get(self.type, "")

    def to_index_key(self) -> Any:
        """Return the constant key this term denotes, or None."""
        match self.type:
            case TermType.NUMBER:
                return _to_number(self.number)
            case TermType.UNARY:
                return self.unary.to_number()
            case TermType.STRING:
                if self.string.queries is None:
                    return self.string.value
        return None

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Extend ``xs`` with the constant path of this term, or return None."""
        match self.type:
            case TermType.INDEX:
                result = self.index.to_indices(xs)
            case TermType.QUERY:
                result = self.query.to_indices(xs)
            case _:
                return None
        for suffix in self.suffix_list:
            if result is None:
                return None
            result = suffix.to_indices(result)
        return result

    def to_number(self) -> int | float | None:
        """Return the value of a number term, or None for other terms."""
        if self.type == TermType.NUMBER:
            return _to_number(self.number)
        return None


@dataclass
class Unary:
    """A unary operator applied to a term."""

    op: str = ""
    term: Term | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write(self.op)
        self.term._write_to(b)

    def minify(self) -> None:
        """Minify the operand."""
        _minify(self.term)

    def to_number(self) -> int | float | None:
        """Return the constant number this denotes, or None."""
        v = self.term.to_number()
        if v is not None and self.op == "-":
            v = -v
        return v


@dataclass
class Pattern:
    """A destructuring pattern: a variable, an array or an object."""

    name: str = ""
    array: list[Pattern] = field(default_factory=list)
    object: list[PatternObject] = field(default_factory=list)

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        if self.name:
            b.write(self.name)
            return
        for items, (opening, closing) in ((self.array, "[]"), (self.object, "{}")):
            if items:
                b.write(opening)
                _write_joined(b, items, ", ")
                b.write(closing)
                return


@dataclass
class _KeyVal:
    """An object entry keyed by a name, a string or a query."""

    key: str = ""
    key_string: String | None = None
    key_query: Query | None = None
    val: Any = None

    def _write_to(self, b: _Builder) -> None:
        if self.key:
            b.write(self.key)
        elif self.key_string is not None:
            self.key_string._write_to(b)
        elif self.key_query is not None:
            b.write("(")
            self.key_query._write_to(b)
            b.write(")")
        if self.val is not None:
            b.write(": ")
            self.val._write_to(b)


@dataclass
class PatternObject(_KeyVal):
    """One entry of an object pattern; ``val`` is a Pattern."""

    def __str__(self) -> str:
        return _render(self)


@dataclass
class Index:
    """An index or slice: ``.name``, ``."str"``, ``.[q]`` or ``.[a:b]``."""

    name: str = ""
    string: String | None = None
    start: Query | None = None
    end: Query | None = None
    is_slice: bool = False

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        # ". .x" != "..x" and "0 .x" != "0.x"
        c = b.last_char()
        if c and c in ".0123456789":
            b.write(" ")
        b.write(".")
        self._write_suffix_to(b)

    def _write_suffix_to(self, b: _Builder) -> None:
        if self.name:
            b.write(self.name)
        elif self.string is not None:
            self.string._write_to(b)
        else:
            b.write("[")
            if self.is_slice:
                if self.start is not None:
                    self.start._write_to(b)
                b.write(":")
                if self.end is not None:
                    self.end._write_to(b)
            else:
                self.start._write_to(b)
            b.write("]")

    def minify(self) -> None:
        """Minify the nested queries."""
        _minify(self.string, self.start, self.end)

    def to_index_key(self) -> Any:
        """Return the constant key of this index, or None."""
        if self.name:
            return self.name
        if self.string is not None:
            return self.string.value if self.string.queries is None else None
        if not self.is_slice:
            return self.start.to_index_key()
        bounds: dict[str, Any] = {"start": None, "end": None}
        for key, bound in (("start", self.start), ("end", self.end)):
            if bound is not None:
                bounds[key] = bound.to_index_key()
                if bounds[key] is None:
                    return None
        return bounds

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Return ``xs`` extended with this key, or None if not constant."""
        k = self.to_index_key()
        if k is None:
            return None
        return [*xs, k]


@dataclass
class Func:
    """A function call."""

    name: str = ""
    args: list[Query] = field(default_factory=list)

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write(self.name)
        if self.args:
            b.write("(")
            _write_joined(b, self.args, "; ")
            b.write(")")

    def minify(self) -> None:
        """Minify the arguments."""
        _minify(*self.args)

    def to_func(self) -> str:
        """Return the name of a call without arguments, or ``""``."""
        return "" if self.args else self.name


@dataclass
class String:
    """A string literal; ``queries`` is set when it has interpolations."""

    value: str = ""
    queries: list[Query] | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        if self.queries is None:
            _encode_string(b, self.value)
            return
        b.write('"')
        for q in self.queries:
            if q.term.string is None:
                b.write("\\")
                q._write_to(b)
            else:
                b.write(str(q)[1:-1])
        b.write('"')

    def minify(self) -> None:
        """Minify the interpolated queries."""
        _minify(*(self.queries or ()))


@dataclass
class Object:
    """An object construction."""

    key_vals: list[ObjectKeyVal] = field(default_factory=list)

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        _write_braced(b, self.key_vals)

    def minify(self) -> None:
        """Minify each entry."""
        _minify(*self.key_vals)


@dataclass
class ObjectKeyVal(_KeyVal):
    """One entry of an object construction; ``val`` is a Query."""

    def __str__(self) -> str:
        return _render(self)

    def minify(self) -> None:
        """Minify the key and the value."""
        _minify(self.key_string if self.key_string is not None else self.key_query)
        _minify(self.val)


@dataclass
class Array:
    """An array construction."""

    query: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write("[")
        if self.query is not None:
            self.query._write_to(b)
        b.write("]")

    def minify(self) -> None:
        """Minify the element query."""
        _minify(self.query)


@dataclass
class Suffix:
    """A term suffix: index, iteration, ``?`` or a binding."""

    index: Index | None = None
    iter: bool = False
    optional: bool = False
    bind: Bind | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        if self.index is not None:
            if self.index.name or self.index.string is not None:
                self.index._write_to(b)
            else:
                self.index._write_suffix_to(b)
        elif self.iter:
            b.write("[]")
        elif self.optional:
            b.write("?")
        elif self.bind is not None:
            self.bind._write_to(b)

    def minify(self) -> None:
        """Minify the index or binding."""
        _minify(self.index if self.index is not None else self.bind)

    def to_term(self) -> Term | None:
        """Return an equivalent term for index and iteration suffixes."""
        if self.index is not None:
            return Term(type=TermType.INDEX, index=self.index)
        if self.iter:
            return Term(type=TermType.IDENTITY, suffix_list=[Suffix(iter=True)])
        return None

    def to_indices(self, xs: list[Any]) -> list[Any] | None:
        """Extend ``xs`` with this suffix's key, or return None."""
        if self.index is None:
            return None
        return self.index.to_indices(xs)


@dataclass
class Bind:
    """A variable binding ``as $x | body``, with ``?//`` alternatives."""

    patterns: list[Pattern] = field(default_factory=list)
    body: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        for i, p in enumerate(self.patterns):
            b.write(" as " if i == 0 else "?// ")
            p._write_to(b)
            b.write(" ")
        b.write("| ")
        self.body._write_to(b)

    def minify(self) -> None:
        """Minify the body."""
        _minify(self.body)


@dataclass
class IfElif:
    """An ``elif`` branch."""

    cond: Query | None = None
    then: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write("elif ")
        self._write_branch(b)

    def _write_branch(self, b: _Builder) -> None:
        self.cond._write_to(b)
        b.write(" then ")
        self.then._write_to(b)

    def minify(self) -> None:
        """Minify the condition and branch."""
        _minify(self.cond, self.then)


@dataclass
class If(IfElif):
    """An ``if`` expression."""

    elif_: list[IfElif] = field(default_factory=list)
    else_: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write("if ")
        self._write_branch(b)
        for e in self.elif_:
            b.write(" ")
            e._write_to(b)
        if self.else_ is not None:
            b.write(" else ")
            self.else_._write_to(b)
        b.write(" end")

    def minify(self) -> None:
        """Minify every branch."""
        _minify(self.cond, self.then, *self.elif_, self.else_)


@dataclass
class Try:
    """A ``try`` expression with optional ``catch``."""

    body: Query | None = None
    catch: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write("try ")
        self.body._write_to(b)
        if self.catch is not None:
            b.write(" catch ")
            self.catch._write_to(b)

    def minify(self) -> None:
        """Minify the body and handler."""
        _minify(self.body, self.catch)


def _write_fold(
    b: _Builder, keyword: str, query: Query, pattern: Pattern, parts: Iterable[Query | None]
) -> None:
    b.write(keyword + " ")
    query._write_to(b)
    b.write(" as ")
    pattern._write_to(b)
    b.write(" (")
    _write_joined(b, [q for q in parts if q is not None], "; ")
    b.write(")")


@dataclass
class Reduce:
    """A ``reduce`` expression."""

    query: Query | None = None
    pattern: Pattern | None = None
    start: Query | None = None
    update: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        _write_fold(b, "reduce", self.query, self.pattern, (self.start, self.update))

    def minify(self) -> None:
        """Minify the nested queries."""
        _minify(self.query, self.start, self.update)


@dataclass
class Foreach:
    """A ``foreach`` expression."""

    query: Query | None = None
    pattern: Pattern | None = None
    start: Query | None = None
    update: Query | None = None
    extract: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        _write_fold(
            b, "foreach", self.query, self.pattern, (self.start, self.update, self.extract)
        )

    def minify(self) -> None:
        """Minify the nested queries."""
        _minify(self.query, self.start, self.update, self.extract)


@dataclass
class Label:
    """A ``label $name | body`` expression."""

    ident: str = ""
    body: Query | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write(f"label {self.ident} | ")
        self.body._write_to(b)

    def minify(self) -> None:
        """Minify the body."""
        _minify(self.body)


@dataclass
class ConstTerm:
    """A constant value, as used in module metadata."""

    object: ConstObject | None = None
    array: ConstArray | None = None
    number: str = ""
    string: str = ""
    null: bool = False
    true: bool = False
    false: bool = False

    def __str__(self) -> str:
        return _render(self)

    def _keyword(self) -> str:
        for flag, word in ((self.null, "null"), (self.true, "true"), (self.false, "false")):
            if flag:
                return word
        return ""

    def _write_to(self, b: _Builder) -> None:
        if self.object is not None:
            self.object._write_to(b)
        elif self.array is not None:
            self.array._write_to(b)
        elif self.number:
            b.write(self.number)
        elif self._keyword():
            b.write(self._keyword())
        else:
            _encode_string(b, self.string)

    def to_value(self) -> Any:
        """Return the plain Python value of this constant."""
        if self.object is not None:
            return self.object.to_value()
        if self.array is not None:
            return self.array.to_value()
        if self.number:
            return _to_number(self.number)
        if self.null:
            return None
        if self.true or self.false:
            return self.true
        return self.string

    def to_string(self) -> str | None:
        """Return the string if this constant is a string, else None."""
        if (
            self.object is not None
            or self.array is not None
            or self.number
            or self._keyword()
        ):
            return None
        return self.string


@dataclass
class ConstObject:
    """A constant object."""

    key_vals: list[ConstObjectKeyVal] = field(default_factory=list)

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        _write_braced(b, self.key_vals)

    def to_value(self) -> dict[str, Any]:
        """Return the object as a dict."""
        return {kv.key or kv.key_string: kv.val.to_value() for kv in self.key_vals}


@dataclass
class ConstObjectKeyVal:
    """One entry of a constant object."""

    key: str = ""
    key_string: str = ""
    val: ConstTerm | None = None

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        if self.key:
            b.write(self.key)
        else:
            _encode_string(b, self.key_string)
        b.write(": ")
        self.val._write_to(b)


@dataclass
class ConstArray:
    """A constant array."""

    elems: list[ConstTerm] = field(default_factory=list)

    def __str__(self) -> str:
        return _render(self)

    def _write_to(self, b: _Builder) -> None:
        b.write("[")
        _write_joined(b, self.elems, ", ")
        b.write("]")

    def to_value(self) -> list[Any]:
        """Return the array as a list."""
        return [e.to_value() for e in self.elems]