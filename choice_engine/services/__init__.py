# Source adapters
"""
Services package for the choice engine.

Converts records of each choice source to and from the canonical model.
"""

from . import external_converter, rules_engine_converter
from .wire_converter import (
    to_wire_choice,
    from_wire_choice,
    build_selection,
    selection_from_wire,
    parse_choice_payload,
    parse_selection_payload,
)

__all__ = [
    'external_converter',
    'rules_engine_converter',
    'to_wire_choice',
    'from_wire_choice',
    'build_selection',
    'selection_from_wire',
    'parse_choice_payload',
    'parse_selection_payload',
]
