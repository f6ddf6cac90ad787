"""
Wire Protocol Messages.

Pydantic models for choice definitions and choice selections as they travel
over the service API. One-of groups of the protocol (option-set variant,
option variant, bundle item variant) are modelled as optional fields of
which at most one may be set.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from choice_engine.core.choice_types import WireChoiceType


class WireChoiceSource(str, Enum):
    """Choice source enum of the wire protocol."""
    UNSPECIFIED = "CHOICE_SOURCE_UNSPECIFIED"
    RACE = "CHOICE_SOURCE_RACE"
    SUBRACE = "CHOICE_SOURCE_SUBRACE"
    CLASS = "CHOICE_SOURCE_CLASS"
    BACKGROUND = "CHOICE_SOURCE_BACKGROUND"
    FEATURE = "CHOICE_SOURCE_FEATURE"


def _at_most_one(model: BaseModel, fields: List[str]) -> None:
    set_fields = [name for name in fields if getattr(model, name) is not None]
    if len(set_fields) > 1:
        raise ValueError(f"Only one of {', '.join(fields)} may be set, got {', '.join(set_fields)}")


# ==================== Choice definitions ====================

class WireItemReference(BaseModel):
    """A single item."""
    item_id: str
    name: str = ""


class WireCountedItemReference(BaseModel):
    """An item with quantity."""
    item_id: str
    name: str = ""
    quantity: int = Field(default=1, ge=1)


class WireCategoryReference(BaseModel):
    """An open category of items."""
    category_id: str
    exclude_ids: List[str] = []


class WireNestedChoice(BaseModel):
    """A choice used as an option."""
    choice: "WireChoice"


class WireBundleItem(BaseModel):
    """One entry of a bundle."""
    concrete_item: Optional[WireCountedItemReference] = None
    choice_item: Optional[WireNestedChoice] = None

    @model_validator(mode="after")
    def check_one_of(self) -> "WireBundleItem":
        _at_most_one(self, ["concrete_item", "choice_item"])
        return self


class WireItemBundle(BaseModel):
    """Several items taken together."""
    items: List[WireBundleItem] = []


class WireChoiceOption(BaseModel):
    """One option of a choice."""
    item: Optional[WireItemReference] = None
    counted_item: Optional[WireCountedItemReference] = None
    bundle: Optional[WireItemBundle] = None
    nested_choice: Optional[WireNestedChoice] = None

    @model_validator(mode="after")
    def check_one_of(self) -> "WireChoiceOption":
        _at_most_one(self, ["item", "counted_item", "bundle", "nested_choice"])
        return self


class WireExplicitOptions(BaseModel):
    """A concrete option list."""
    options: List[WireChoiceOption] = []


class WireChoice(BaseModel):
    """A choice definition."""
    id: str
    description: str = ""
    choose_count: int = 1
    choice_type: WireChoiceType = WireChoiceType.UNSPECIFIED
    explicit_options: Optional[WireExplicitOptions] = None
    category_reference: Optional[WireCategoryReference] = None

    @model_validator(mode="after")
    def check_one_of(self) -> "WireChoice":
        _at_most_one(self, ["explicit_options", "category_reference"])
        return self


for _model in (WireNestedChoice, WireBundleItem, WireItemBundle, WireChoiceOption, WireExplicitOptions, WireChoice):
    _model.model_rebuild()


# ==================== Choice selections ====================

class WireAbilityScoreChoice(BaseModel):
    """An ability score bonus picked by the player."""
    ability: str
    bonus: int


class ChoiceSelectionMessage(BaseModel):
    """A player's selection for one choice."""
    choice_id: str
    choice_type: WireChoiceType = WireChoiceType.UNSPECIFIED
    source: WireChoiceSource = WireChoiceSource.UNSPECIFIED
    selected_keys: List[str] = []
    ability_score_choices: List[WireAbilityScoreChoice] = []
