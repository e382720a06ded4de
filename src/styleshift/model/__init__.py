"""Data model: property keys, types, rules, properties and items."""

from styleshift.model.item import SimpleItem, StyledItem
from styleshift.model.key import PropertyKey, as_key
from styleshift.model.property import PropertyContainer, StyleProperty
from styleshift.model.rule import ObservableRule, RuleContent, StaticRule, WrappedRule
from styleshift.model.types import (
    BOOLEAN,
    COLOR,
    FLOAT,
    INTEGER,
    STRING,
    Color,
    PropertyType,
    get_type,
    register_type,
)

__all__ = [
    "BOOLEAN",
    "COLOR",
    "FLOAT",
    "INTEGER",
    "STRING",
    "Color",
    "ObservableRule",
    "PropertyContainer",
    "PropertyKey",
    "PropertyType",
    "RuleContent",
    "SimpleItem",
    "StaticRule",
    "StyleProperty",
    "StyledItem",
    "WrappedRule",
    "as_key",
    "get_type",
    "register_type",
]
