"""Kinds of terms in a jq query syntax tree."""

from __future__ import annotations

import enum


class TermType(enum.IntEnum):
    """The type of a query term."""

    IDENTITY = 1
    RECURSE = 2
    NULL = 3
    TRUE = 4
    FALSE = 5
    INDEX = 6
    FUNC = 7
    OBJECT = 8
    ARRAY = 9
    NUMBER = 10
    UNARY = 11
    FORMAT = 12
    STRING = 13
    IF = 14
    TRY = 15
    REDUCE = 16
    FOREACH = 17
    LABEL = 18
    BREAK = 19
    QUERY = 20

    def go_string(self) -> str:
        """Return the qualified constant name, e.g. ``jqtree.TermTypeIdentity``."""
        return "jqtree.TermType" + self.name.title()