"""
Wire Choice Conversion.

Maps canonical choices to and from wire definition messages, and builds the
wire selection record sent when a player answers a choice.

Conversion functions are total and return None for None. Decoding raw
payload dicts (parse_*_payload) is strict and raises InvalidChoiceDataError.
"""
import logging
from typing import Any, Dict, Iterable, Optional, Union

from pydantic import ValidationError

from choice_engine.core.choices import (
    AbilityScoreSelection,
    BundleItem,
    CategoryReference,
    Choice,
    ChoiceItem,
    ChoiceOption,
    ChoiceSelection,
    ChoiceSource,
    ConcreteItem,
    CountedItemReference,
    ExplicitOptions,
    ItemBundle,
    ItemReference,
    NestedChoice,
)
from choice_engine.core.choice_types import from_wire_choice_type, to_wire_choice_type
from choice_engine.core.errors import InvalidChoiceDataError
from choice_engine.models.wire import (
    ChoiceSelectionMessage,
    WireAbilityScoreChoice,
    WireBundleItem,
    WireCategoryReference,
    WireChoice,
    WireChoiceOption,
    WireChoiceSource,
    WireCountedItemReference,
    WireExplicitOptions,
    WireItemBundle,
    WireItemReference,
    WireNestedChoice,
)

logger = logging.getLogger(__name__)


_SOURCE_TO_WIRE: Dict[ChoiceSource, WireChoiceSource] = {
    ChoiceSource.RACE: WireChoiceSource.RACE,
    ChoiceSource.SUBRACE: WireChoiceSource.SUBRACE,
    ChoiceSource.CLASS: WireChoiceSource.CLASS,
    ChoiceSource.BACKGROUND: WireChoiceSource.BACKGROUND,
    ChoiceSource.FEATURE: WireChoiceSource.FEATURE,
}

_WIRE_TO_SOURCE: Dict[WireChoiceSource, ChoiceSource] = {
    wire: source for source, wire in _SOURCE_TO_WIRE.items()
}


def to_wire_source(source: Union[ChoiceSource, str, None]) -> WireChoiceSource:
    """Map a choice source to the wire enum; player and unknown sources are unspecified."""
    try:
        return _SOURCE_TO_WIRE.get(ChoiceSource(source), WireChoiceSource.UNSPECIFIED)
    except ValueError:
        return WireChoiceSource.UNSPECIFIED


def from_wire_source(source: Union[WireChoiceSource, str, None]) -> ChoiceSource:
    """Map a wire source back; unspecified and unknown sources count as player choices."""
    try:
        return _WIRE_TO_SOURCE.get(WireChoiceSource(source), ChoiceSource.PLAYER)
    except ValueError:
        return ChoiceSource.PLAYER


# ==================== Canonical -> wire ====================

def _counted_to_wire(item: CountedItemReference) -> WireCountedItemReference:
    # The wire format has no zero quantities; an item is always at least one
    quantity = item.quantity if isinstance(item.quantity, int) and item.quantity >= 1 else 1
    return WireCountedItemReference(item_id=item.item_id, name=item.name, quantity=quantity)


def _bundle_item_to_wire(item: BundleItem) -> WireBundleItem:
    if isinstance(item, ConcreteItem):
        return WireBundleItem(concrete_item=_counted_to_wire(item.item))
    if isinstance(item, ChoiceItem):
        return WireBundleItem(choice_item=WireNestedChoice(choice=to_wire_choice(item.nested.choice)))
    raise TypeError(f"Unsupported bundle item: {item!r}")


def option_to_wire(option: ChoiceOption) -> WireChoiceOption:
    """Convert one canonical option to its wire form."""
    if isinstance(option, ItemReference):
        return WireChoiceOption(item=WireItemReference(item_id=option.item_id, name=option.name))
    if isinstance(option, CountedItemReference):
        return WireChoiceOption(counted_item=_counted_to_wire(option))
    if isinstance(option, ItemBundle):
        return WireChoiceOption(
            bundle=WireItemBundle(items=[_bundle_item_to_wire(item) for item in option.items])
        )
    if isinstance(option, NestedChoice):
        return WireChoiceOption(nested_choice=WireNestedChoice(choice=to_wire_choice(option.choice)))
    raise TypeError(f"Unsupported choice option: {option!r}")


def to_wire_choice(choice: Optional[Choice]) -> Optional[WireChoice]:
    """Convert a canonical choice tree to a wire definition message."""
    if choice is None:
        return None

    message = WireChoice(
        id=choice.id,
        description=choice.description,
        choose_count=choice.choose_count,
        choice_type=to_wire_choice_type(choice.choice_type),
    )
    if isinstance(choice.option_set, CategoryReference):
        message.category_reference = WireCategoryReference(
            category_id=choice.option_set.category_id,
            exclude_ids=sorted(choice.option_set.exclude_ids),
        )
    else:
        message.explicit_options = WireExplicitOptions(
            options=[option_to_wire(option) for option in choice.option_set.options]
        )
    return message


# ==================== Wire -> canonical ====================

def _counted_from_wire(item: WireCountedItemReference) -> CountedItemReference:
    return CountedItemReference(item_id=item.item_id, name=item.name, quantity=item.quantity)


def _bundle_item_from_wire(item: WireBundleItem) -> Optional[BundleItem]:
    if item.concrete_item is not None:
        return ConcreteItem(item=_counted_from_wire(item.concrete_item))
    if item.choice_item is not None:
        return ChoiceItem(nested=NestedChoice(choice=from_wire_choice(item.choice_item.choice)))
    return None


def option_from_wire(option: Optional[WireChoiceOption]) -> Optional[ChoiceOption]:
    """Convert one wire option; an option with no variant set yields None."""
    if option is None:
        return None
    if option.item is not None:
        return ItemReference(item_id=option.item.item_id, name=option.item.name)
    if option.counted_item is not None:
        return _counted_from_wire(option.counted_item)
    if option.bundle is not None:
        items = [_bundle_item_from_wire(item) for item in option.bundle.items]
        return ItemBundle(items=tuple(item for item in items if item is not None))
    if option.nested_choice is not None:
        return NestedChoice(choice=from_wire_choice(option.nested_choice.choice))
    return None


def from_wire_choice(message: Optional[WireChoice]) -> Optional[Choice]:
    """
    Convert a wire definition message to a canonical choice.

    A message without an option set becomes an empty explicit option list.
    """
    if message is None:
        return None

    if message.category_reference is not None:
        option_set = CategoryReference(
            category_id=message.category_reference.category_id,
            exclude_ids=frozenset(message.category_reference.exclude_ids),
        )
    else:
        wire_options = message.explicit_options.options if message.explicit_options else []
        options = [option_from_wire(option) for option in wire_options]
        option_set = ExplicitOptions(options=tuple(option for option in options if option is not None))

    return Choice(
        id=message.id,
        description=message.description,
        choose_count=max(message.choose_count, 1),
        choice_type=from_wire_choice_type(message.choice_type),
        option_set=option_set,
    )


# ==================== Selections ====================

def build_selection(
    choice: Optional[Choice],
    selected_keys: Iterable[str],
    source: Union[ChoiceSource, str, None],
    ability_score_choices: Iterable[AbilityScoreSelection] = (),
) -> Optional[ChoiceSelectionMessage]:
    """
    Build the wire selection record for a player's answer to a choice.

    The keys are passed through as given; whether they are legal picks for the
    choice is decided by the rules engine, not here.
    """
    if choice is None:
        return None

    return ChoiceSelectionMessage(
        choice_id=choice.id,
        choice_type=to_wire_choice_type(choice.choice_type),
        source=to_wire_source(source),
        selected_keys=list(selected_keys or []),
        ability_score_choices=[
            WireAbilityScoreChoice(ability=asc.ability, bonus=asc.bonus)
            for asc in ability_score_choices or []
        ],
    )


def selection_from_wire(message: Optional[ChoiceSelectionMessage]) -> Optional[ChoiceSelection]:
    """Convert a wire selection record to the domain selection."""
    if message is None:
        return None

    return ChoiceSelection(
        choice_id=message.choice_id,
        choice_type=from_wire_choice_type(message.choice_type),
        source=from_wire_source(message.source),
        selected_keys=tuple(message.selected_keys),
        ability_score_choices=tuple(
            AbilityScoreSelection(ability=asc.ability, bonus=asc.bonus)
            for asc in message.ability_score_choices
        ),
    )


# ==================== Payload decoding ====================

def parse_choice_payload(data: Dict[str, Any]) -> WireChoice:
    """Decode a raw choice definition payload."""
    try:
        return WireChoice.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected choice payload: {e.error_count()} validation error(s)")
        raise InvalidChoiceDataError(
            message="Malformed choice definition",
            errors=e.errors(include_url=False),
            payload_type="choice",
        ) from e


def parse_selection_payload(data: Dict[str, Any]) -> ChoiceSelectionMessage:
    """Decode a raw choice selection payload."""
    try:
        return ChoiceSelectionMessage.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected selection payload: {e.error_count()} validation error(s)")
        raise InvalidChoiceDataError(
            message="Malformed choice selection",
            errors=e.errors(include_url=False),
            payload_type="selection",
        ) from e
