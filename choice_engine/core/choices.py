"""
Canonical Choice Model.

Every source of character-creation choices (5e API text, rules-engine records,
wire messages) is normalized into this one recursive tree:

- Choice: pick `choose_count` options from an option set
- Option sets: ExplicitOptions (a concrete list) or CategoryReference (an open
  category resolved against a catalog elsewhere)
- Options: ItemReference, CountedItemReference, ItemBundle, NestedChoice
- Bundle items: ConcreteItem or ChoiceItem

All nodes are frozen value objects and compare structurally.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Tuple, Union


class ChoiceType(str, Enum):
    """Canonical kinds of character-creation choices."""
    SKILL = "skill"
    TOOL = "tool"
    LANGUAGE = "language"
    WEAPON_PROFICIENCY = "weapon_proficiency"
    ARMOR_PROFICIENCY = "armor_proficiency"
    SPELL = "spell"
    FEAT = "feat"
    EQUIPMENT = "equipment"


# ==================== Options ====================

@dataclass(frozen=True)
class ItemReference:
    """A single concrete item, quantity implicitly 1."""
    item_id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "item", "item_id": self.item_id, "name": self.name}


@dataclass(frozen=True)
class CountedItemReference:
    """An item with an explicit quantity ("20 arrows")."""
    item_id: str
    name: str
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "counted_item",
            "item_id": self.item_id,
            "name": self.name,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class NestedChoice:
    """An option that is itself a sub-choice."""
    choice: "Choice"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "nested_choice", "choice": self.choice.to_dict()}


@dataclass(frozen=True)
class ConcreteItem:
    """Bundle entry holding a counted item."""
    item: CountedItemReference

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "concrete_item", "item": self.item.to_dict()}


@dataclass(frozen=True)
class ChoiceItem:
    """Bundle entry holding a nested choice ("a martial weapon" in "a martial weapon and a shield")."""
    nested: NestedChoice

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "choice_item", "nested": self.nested.to_dict()}


BundleItem = Union[ConcreteItem, ChoiceItem]


@dataclass(frozen=True)
class ItemBundle:
    """A fixed package of items and/or choices taken together."""
    items: Tuple[BundleItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "bundle", "items": [item.to_dict() for item in self.items]}


ChoiceOption = Union[ItemReference, CountedItemReference, ItemBundle, NestedChoice]

CHOICE_OPTION_TYPES = (ItemReference, CountedItemReference, ItemBundle, NestedChoice)


# ==================== Option Sets ====================

@dataclass(frozen=True)
class ExplicitOptions:
    """A concrete, enumerable list of options."""
    options: Tuple[ChoiceOption, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "explicit_options",
            "options": [option.to_dict() for option in self.options],
        }


@dataclass(frozen=True)
class CategoryReference:
    """An open class of items ("any simple weapon") resolved elsewhere."""
    category_id: str
    exclude_ids: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "exclude_ids", frozenset(self.exclude_ids))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "category_reference",
            "category_id": self.category_id,
            "exclude_ids": sorted(self.exclude_ids),
        }


OptionSet = Union[ExplicitOptions, CategoryReference]


# ==================== Choice ====================

@dataclass(frozen=True)
class Choice:
    """A request for the player to pick `choose_count` options from an option set."""
    id: str
    description: str
    choose_count: int
    choice_type: ChoiceType
    option_set: OptionSet

    def __post_init__(self):
        if not isinstance(self.option_set, (ExplicitOptions, CategoryReference)):
            raise TypeError(
                f"Choice {self.id!r} needs exactly one option set, got {type(self.option_set).__name__}"
            )
        object.__setattr__(self, "choice_type", ChoiceType(self.choice_type))

    @property
    def is_category_reference(self) -> bool:
        return isinstance(self.option_set, CategoryReference)

    def iter_options(self) -> Iterator[ChoiceOption]:
        """Yield the top-level options (nothing for a category reference)."""
        if isinstance(self.option_set, ExplicitOptions):
            yield from self.option_set.options

    def depth(self) -> int:
        """Nesting depth of this choice; a choice with no nested choices has depth 1."""
        deepest = 0
        for option in self.iter_options():
            for nested in _nested_choices(option):
                deepest = max(deepest, nested.choice.depth())
        return 1 + deepest

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "description": self.description,
            "choose_count": self.choose_count,
            "choice_type": self.choice_type.value,
            "option_set": self.option_set.to_dict(),
        }


def _nested_choices(option: ChoiceOption) -> Tuple[NestedChoice, ...]:
    if isinstance(option, NestedChoice):
        return (option,)
    if isinstance(option, ItemBundle):
        return tuple(item.nested for item in option.items if isinstance(item, ChoiceItem))
    return ()


# ==================== Dict Decoding ====================

def option_from_dict(data: Dict[str, Any]) -> ChoiceOption:
    """Rebuild a ChoiceOption from its `to_dict()` form."""
    option_type = data.get("type")
    if option_type == "item":
        return ItemReference(item_id=data["item_id"], name=data["name"])
    if option_type == "counted_item":
        return CountedItemReference(
            item_id=data["item_id"],
            name=data["name"],
            quantity=data.get("quantity", 1),
        )
    if option_type == "bundle":
        return ItemBundle(items=tuple(bundle_item_from_dict(item) for item in data.get("items", [])))
    if option_type == "nested_choice":
        return NestedChoice(choice=choice_from_dict(data["choice"]))
    raise TypeError(f"Unknown choice option type: {option_type!r}")


def bundle_item_from_dict(data: Dict[str, Any]) -> BundleItem:
    """Rebuild a BundleItem from its `to_dict()` form."""
    item_type = data.get("type")
    if item_type == "concrete_item":
        return ConcreteItem(item=option_from_dict(data["item"]))
    if item_type == "choice_item":
        return ChoiceItem(nested=option_from_dict(data["nested"]))
    raise TypeError(f"Unknown bundle item type: {item_type!r}")


def option_set_from_dict(data: Dict[str, Any]) -> OptionSet:
    """Rebuild an option set from its `to_dict()` form."""
    set_type = data.get("type")
    if set_type == "explicit_options":
        return ExplicitOptions(options=tuple(option_from_dict(o) for o in data.get("options", [])))
    if set_type == "category_reference":
        return CategoryReference(
            category_id=data["category_id"],
            exclude_ids=frozenset(data.get("exclude_ids", [])),
        )
    raise TypeError(f"Unknown option set type: {set_type!r}")


def choice_from_dict(data: Dict[str, Any]) -> Choice:
    """Rebuild a Choice tree from its `to_dict()` form."""
    return Choice(
        id=data["id"],
        description=data.get("description", ""),
        choose_count=data.get("choose_count", 1),
        choice_type=ChoiceType(data.get("choice_type", ChoiceType.EQUIPMENT.value)),
        option_set=option_set_from_dict(data["option_set"]),
    )


# ==================== Selections ====================

class ChoiceSource(str, Enum):
    """Where a choice being answered came from."""
    RACE = "race"
    SUBRACE = "subrace"
    CLASS = "class"
    BACKGROUND = "background"
    FEATURE = "feature"
    PLAYER = "player"


@dataclass(frozen=True)
class AbilityScoreSelection:
    """A chosen ability score bonus (+1 strength)."""
    ability: str
    bonus: int


@dataclass(frozen=True)
class ChoiceSelection:
    """A player's answer to a Choice: which option keys were picked."""
    choice_id: str
    choice_type: ChoiceType
    source: ChoiceSource
    selected_keys: Tuple[str, ...] = ()
    ability_score_choices: Tuple[AbilityScoreSelection, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "selected_keys", tuple(self.selected_keys))
        object.__setattr__(self, "ability_score_choices", tuple(self.ability_score_choices))
