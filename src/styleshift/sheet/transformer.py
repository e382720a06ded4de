"""Lark Transformer that converts a rule sheet parse tree into a RuleSheet."""

from __future__ import annotations

import logging
from pathlib import Path

from lark import Lark, Token, Transformer

from styleshift.errors import SheetParseError, UnknownTypeError
from styleshift.model.rule import StaticRule
from styleshift.model.types import get_type, is_type_name
from styleshift.sheet.model import RuleSheet, TransitionSpec

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

logger = logging.getLogger(__name__)


class _Sentinel:
    """Marker objects returned by transformer rules for top-level statements."""


class _PropertyDecl(_Sentinel):
    def __init__(self, key: str, type_name: str):
        self.key = key
        self.type_name = type_name


class _TransitionDecl(_Sentinel):
    def __init__(self, target: str, strategy: str, duration: int | None):
        self.target = target
        self.strategy = strategy
        self.duration = duration


class _RuleDecl(_Sentinel):
    def __init__(self, name: str, values: list[tuple[str, str]]):
        self.name = name
        self.values = values


class SheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into intermediate sentinel objects."""

    # ---- values ----
    # Values stay raw strings, the property type converts them on read.

    def color_value(self, items: list[Token]) -> str:
        return str(items[0])

    def number_value(self, items: list[Token]) -> str:
        return str(items[0])

    def string_value(self, items: list[Token]) -> str:
        raw = str(items[0])
        return raw[1:-1].replace('\\"', '"').replace("\\\\", "\\")

    def name_value(self, items: list[Token]) -> str:
        return str(items[0])

    # ---- structural ----

    def key(self, items: list[Token]) -> str:
        return ".".join(str(t) for t in items)

    def declaration(self, items: list[object]) -> tuple[str, str]:
        return (str(items[0]), str(items[1]))

    def rule(self, items: list[object]) -> _RuleDecl:
        name = str(items[0])
        values = [item for item in items[1:] if isinstance(item, tuple)]
        return _RuleDecl(name, values)

    def property_decl(self, items: list[object]) -> _PropertyDecl:
        return _PropertyDecl(str(items[0]), str(items[1]))

    def transition_decl(self, items: list[object]) -> _TransitionDecl:
        duration = int(str(items[2])) if len(items) > 2 and items[2] is not None else None
        return _TransitionDecl(str(items[0]), str(items[1]), duration)

    def start(self, items: list[object]) -> list[_Sentinel]:
        return [item for item in items if isinstance(item, _Sentinel)]


def _assemble_sheet(statements: list[_Sentinel]) -> RuleSheet:
    """Walk the flat list of statements and build a RuleSheet."""
    sheet = RuleSheet()
    for stmt in statements:
        if isinstance(stmt, _PropertyDecl):
            try:
                get_type(stmt.type_name)
            except UnknownTypeError as exc:
                raise SheetParseError(str(exc), cause=exc) from exc
            sheet.properties[stmt.key] = stmt.type_name

        elif isinstance(stmt, _TransitionDecl):
            sheet.transitions[stmt.target] = TransitionSpec(stmt.strategy, stmt.duration)

        elif isinstance(stmt, _RuleDecl):
            if stmt.name in sheet.rules:
                raise SheetParseError(f"rule {stmt.name!r} is declared twice")
            sheet.rules[stmt.name] = StaticRule(stmt.name, dict(stmt.values))

    # Declarations may follow the rules that use them.
    for rule in sheet.rules.values():
        for key in rule.keys():
            type_name = sheet.properties.get(str(key))
            if type_name is None:
                continue
            raw = rule.raw(key)
            try:
                get_type(type_name).coerce(raw)
            except ValueError as exc:
                raise SheetParseError(
                    f"rule {rule.name!r}: {key} = {raw!r} is not a valid {type_name}", cause=exc
                ) from exc

    for target in sheet.transitions:
        declared = sheet.properties.get(target)
        if declared is not None and declared != target and is_type_name(target):
            logger.warning(
                "@transition %s applies to every %s property, not to the %s property %s",
                target, target, declared, target,
            )
    return sheet


def parse_sheet(source: str) -> RuleSheet:
    """Parse rule sheet source into a RuleSheet."""
    parser = Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
    )
    try:
        tree = parser.parse(source)
    except Exception as e:
        # Try to extract line/column from Lark exceptions.
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise SheetParseError(str(e), line=line, column=column, cause=e) from e
    statements = SheetTransformer().transform(tree)
    return _assemble_sheet(statements)
