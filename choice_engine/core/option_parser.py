"""
Equipment Option Parser.

Turns one textual starting-equipment option into a canonical ChoiceOption:

- "2 handaxes"                          -> CountedItemReference(quantity=2)
- "(a) a mace or (b) a warhammer"       -> NestedChoice over two items
- "(a) a shortsword or (b) any simple weapon"
                                        -> NestedChoice; the second item's id is
                                           the "simple-weapons" category
- "a longbow"                           -> ItemReference

Parsing is total: any input yields an option, at worst a single plain item.
"""
import logging
import re
from typing import List, Optional

from choice_engine.core.choices import (
    Choice,
    ChoiceOption,
    ChoiceType,
    CountedItemReference,
    ExplicitOptions,
    ItemReference,
    NestedChoice,
)
from choice_engine.core.equipment_categories import classify

logger = logging.getLogger(__name__)

DEFAULT_NESTED_CHOICE_ID = "nested_choice"
DISJUNCTION_SEPARATOR = " or "

# "(a)", "(b)", ... at the start of a clause
_OPTION_MARKER = re.compile(r"^\(.\)")
_QUANTITY_TOKEN = re.compile(r"^\+?[0-9]+$")


def slug(text: str) -> str:
    """Lower-cased, hyphen-joined identifier for display text."""
    return text.lower().replace(" ", "-")


def strip_option_marker(text: str) -> str:
    """Remove one leading "(x)" marker and the surrounding whitespace; a bare marker is kept."""
    clean = text.strip()
    if len(clean) > 3 and _OPTION_MARKER.match(clean):
        clean = clean[3:].strip()
    return clean


def parse_quantity(token: str) -> Optional[int]:
    """Parse a leading quantity token, or None if it is not a positive integer."""
    if not _QUANTITY_TOKEN.match(token):
        return None
    quantity = int(token)
    return quantity if quantity > 0 else None


def split_disjunction(text: str) -> List[str]:
    """Split "X or Y or Z" into cleaned, non-empty clauses."""
    clauses = []
    for part in text.split(DISJUNCTION_SEPARATOR):
        clause = strip_option_marker(part)
        if clause:
            clauses.append(clause)
    return clauses


def generate_nested_choice_id(description: str, category_id: str, max_length: int = 30) -> str:
    """Readable id for a nested choice, e.g. "nested_martial-weapons_a_martial_weapon"."""
    clean = description.lower().replace(" ", "_") if isinstance(description, str) else ""
    for char in (",", "(", ")"):
        clean = clean.replace(char, "")
    return f"nested_{category_id}_{clean[:max_length]}"


def _clause_item(clause: str) -> ItemReference:
    category_id = classify(clause)
    if category_id:
        # The option stands for the category; it is not a category choice itself
        return ItemReference(item_id=category_id, name=clause)
    return ItemReference(item_id=slug(clause), name=clause)


def _single_item(text: str) -> ItemReference:
    clean = strip_option_marker(text)
    return ItemReference(item_id=slug(clean), name=clean)


def parse_equipment_option(
    option_text: Optional[str],
    nested_choice_id: str = DEFAULT_NESTED_CHOICE_ID,
) -> ChoiceOption:
    """
    Parse a single equipment option string.

    Precedence:
    1. Leading quantity token ("20 arrows") gives a counted item.
    2. A literal " or " splits the text into clauses of a nested choice; each
       clause is checked against the category table.
    3. Otherwise a single item with any "(x)" marker removed.

    Args:
        option_text: Raw option text from the rules source
        nested_choice_id: Id given to the nested choice built in step 2

    Returns:
        The parsed ChoiceOption
    """
    text = option_text or ""

    tokens = text.split()
    if len(tokens) > 1:
        quantity = parse_quantity(tokens[0])
        if quantity is not None:
            name = " ".join(tokens[1:])
            return CountedItemReference(item_id=slug(name), name=name, quantity=quantity)

    if DISJUNCTION_SEPARATOR in text:
        clauses = split_disjunction(text)
        if len(clauses) >= 2:
            return NestedChoice(
                choice=Choice(
                    id=nested_choice_id,
                    description=text,
                    choose_count=1,
                    choice_type=ChoiceType.EQUIPMENT,
                    option_set=ExplicitOptions(
                        options=tuple(_clause_item(clause) for clause in clauses)
                    ),
                )
            )
        logger.debug(f"Disjunction {text!r} has fewer than two clauses, parsing as one item")

    return _single_item(text)
