"""Syntax tree, backtracking stacks and type names for jq-style queries."""

__version__ = "0.1.0"
__all__ = ["query", "stack", "term_type", "typeof"]