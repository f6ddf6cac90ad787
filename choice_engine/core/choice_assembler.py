"""
Choice Assembler.

The single place where a choice record from any source becomes a canonical Choice
and where the option-set variant is decided:

- an explicit category string with no options        -> CategoryReference
- raw option strings whose description names a category -> CategoryReference
- anything else                                        -> ExplicitOptions

Adapters for the individual sources only map their record fields onto
assemble_choice and never make this decision themselves.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from choice_engine.config import Settings, get_settings
from choice_engine.core.choices import (
    CHOICE_OPTION_TYPES,
    CategoryReference,
    Choice,
    ChoiceOption,
    ExplicitOptions,
)
from choice_engine.core.choice_types import normalize_choice_type, resolve_choice_type
from choice_engine.core.equipment_categories import classify
from choice_engine.core.option_parser import generate_nested_choice_id, parse_equipment_option, slug

logger = logging.getLogger(__name__)

RawOption = Union[str, ChoiceOption]


def _category_id_for(category_text: str) -> str:
    return classify(category_text) or slug(category_text.strip())


def _positive_count(choose_count: Optional[int], choice_id: str) -> int:
    try:
        count = int(choose_count)
    except (TypeError, ValueError):
        count = 0
    if count < 1:
        logger.debug(f"Choice {choice_id}: choose count {choose_count!r} is not positive, using 1")
        return 1
    return count


def assemble_choice(
    choice_id: str,
    description: Optional[str] = None,
    choose_count: Optional[int] = None,
    choice_type: Optional[str] = None,
    options: Optional[Sequence[RawOption]] = None,
    category: Optional[str] = None,
    nested_id_prefix: Optional[str] = None,
) -> Choice:
    """
    Assemble a canonical Choice from loosely-typed record fields.

    Never raises for missing or malformed fields: the description defaults to
    "", the type to equipment and the choose count to 1.

    Args:
        choice_id: Id assigned by the caller (text carries no ids)
        description: Human-readable description of the choice
        choose_count: How many options to pick
        choice_type: Raw choice-type label, normalized here
        options: Raw option strings and/or already-structured ChoiceOptions
        category: Category text supplied by the source ("artisan's tools")
        nested_id_prefix: Prefix for ids of nested choices parsed from option
            text; defaults to choice_id

    Returns:
        The assembled Choice
    """
    description = description if isinstance(description, str) else ""
    options = [opt for opt in (options or []) if opt is not None]
    resolved_type = resolve_choice_type(choice_type)
    count = _positive_count(choose_count, choice_id)

    if isinstance(category, str) and category.strip() and not options:
        option_set = CategoryReference(category_id=_category_id_for(category))
        return Choice(choice_id, description, count, resolved_type, option_set)

    structured = any(isinstance(opt, CHOICE_OPTION_TYPES) for opt in options)
    if not structured:
        category_id = classify(description)
        if category_id:
            return Choice(
                choice_id, description, count, resolved_type,
                CategoryReference(category_id=category_id),
            )

    prefix = nested_id_prefix or choice_id
    parsed = []
    for index, opt in enumerate(options, start=1):
        if isinstance(opt, CHOICE_OPTION_TYPES):
            parsed.append(opt)
        elif isinstance(opt, str):
            parsed.append(parse_equipment_option(opt, nested_choice_id=f"{prefix}_nested_{index}"))
        else:
            logger.debug(f"Choice {choice_id}: dropping unsupported option {opt!r}")

    return Choice(choice_id, description, count, resolved_type, ExplicitOptions(options=tuple(parsed)))


@dataclass(frozen=True)
class ChoiceEngine:
    """
    Stateless entry point bundling the engine operations with its settings.

    Construct one at startup and pass it to whatever needs it; the pattern and
    alias tables are read-only so an engine can be shared between threads.
    """
    settings: Settings = field(default_factory=get_settings)

    def classify(self, text: Optional[str]) -> Optional[str]:
        return classify(text)

    def normalize(self, raw_type: Optional[str]) -> str:
        return normalize_choice_type(raw_type)

    def parse_option(self, option_text: Optional[str], nested_choice_id: Optional[str] = None) -> ChoiceOption:
        return parse_equipment_option(
            option_text,
            nested_choice_id=nested_choice_id or self.settings.NESTED_CHOICE_ID,
        )

    def nested_choice_id(self, description: str, category_id: str) -> str:
        return generate_nested_choice_id(
            description, category_id, max_length=self.settings.NESTED_ID_MAX_LENGTH
        )

    def assemble(
        self,
        choice_id: str,
        description: Optional[str] = None,
        choose_count: Optional[int] = None,
        choice_type: Optional[str] = None,
        options: Optional[Sequence[RawOption]] = None,
        category: Optional[str] = None,
    ) -> Choice:
        return assemble_choice(
            choice_id,
            description=description,
            choose_count=choose_count,
            choice_type=choice_type,
            options=options,
            category=category,
        )
