"""
Tests for the 5e content API adapter.
"""
from choice_engine.config import Settings
from choice_engine.core.choices import (
    CategoryReference,
    Choice,
    ChoiceItem,
    ChoiceType,
    ConcreteItem,
    CountedItemReference,
    ExplicitOptions,
    ItemBundle,
    ItemReference,
    NestedChoice,
)
from choice_engine.models.external import (
    ExternalChoiceOption,
    ExternalCountedReferenceOption,
    ExternalEquipmentChoice,
    ExternalMultipleOption,
    ExternalProficiencyChoice,
    ExternalReference,
    ExternalReferenceOption,
    external_option_from_dict,
)
from choice_engine.services import external_converter
from choice_engine.services.external_converter import (
    convert_equipment_choice,
    convert_equipment_choices,
    convert_option,
    convert_option_list,
    convert_option_tree_choice,
    convert_option_tree_choices,
    convert_proficiency_choices,
)


class TestRecordParsing:
    """Tests for parsing API JSON into records."""

    def test_equipment_choice_aliases(self):
        record = ExternalEquipmentChoice.from_dict({"desc": "a rapier", "choose": 2, "options": ["a rapier"]})
        assert record.description == "a rapier"
        assert record.choose_count == 2

    def test_proficiency_choice_from_key(self):
        record = ExternalProficiencyChoice.from_dict({"type": "tool", "choose": 1, "from": "artisan's tools"})
        assert record.from_ == "artisan's tools"
        assert record.options == []

    def test_reference_requires_index(self):
        assert ExternalReference.from_dict({"name": "Nothing"}) is None
        assert ExternalReference.from_dict({"index": "mace"}) == ExternalReference(key="mace", name="mace")

    def test_unknown_option_type(self):
        assert external_option_from_dict({"option_type": "ability_bonus"}) is None
        assert external_option_from_dict(None) is None

    def test_category_option_set(self, fighter_weapon_option):
        nested = fighter_weapon_option["from"]["options"][1]["choice"]
        record = ExternalChoiceOption.from_dict(nested)
        assert record.category_index == "martial-weapons"
        assert record.option_list is None
        assert record.choice_count == 2


class TestTextRecords:
    """Tests for flat records with text options."""

    def test_none_record(self):
        assert convert_equipment_choice(None, "x") is None

    def test_equipment_choice(self):
        record = ExternalEquipmentChoice(
            description="(a) a rapier or (b) a shortsword",
            options=["(a) a rapier", "(b) a shortsword"],
        )
        choice = convert_equipment_choice(record, "rogue_equipment_1")

        assert choice.id == "rogue_equipment_1"
        assert choice.choice_type is ChoiceType.EQUIPMENT
        assert choice.option_set == ExplicitOptions(options=(
            ItemReference(item_id="a-rapier", name="a rapier"),
            ItemReference(item_id="a-shortsword", name="a shortsword"),
        ))

    def test_category_description(self):
        record = ExternalEquipmentChoice(
            description="(a) a martial weapon and a shield or (b) two martial weapons",
            options=["(a) a martial weapon and a shield", "(b) two martial weapons"],
        )
        choice = convert_equipment_choice(record, "fighter_equipment_2")
        assert choice.option_set == CategoryReference(category_id="martial-weapons")

    def test_non_text_description(self):
        """A numeric description is treated as missing."""
        record = ExternalEquipmentChoice.from_dict({"desc": 5, "options": ["a dagger"]})
        choice = convert_equipment_choice(record, "c")
        assert choice.description == ""
        assert choice.option_set == ExplicitOptions(options=(ItemReference(item_id="a-dagger", name="a dagger"),))

    def test_equipment_choices_numbered(self):
        records = [
            ExternalEquipmentChoice(description="a", options=["a dagger"]),
            None,
            ExternalEquipmentChoice(description="b", options=["a sling"]),
        ]
        choices = convert_equipment_choices(records, "wizard")
        assert [c.id for c in choices] == ["wizard_equipment_1", "wizard_equipment_3"]

    def test_proficiency_choices(self):
        records = [
            ExternalProficiencyChoice(type="skills", choose=2, options=["acrobatics", "athletics"]),
            None,
            ExternalProficiencyChoice(type="tool", choose=1, from_="artisan's tools"),
        ]
        choices = convert_proficiency_choices(records, "rogue")

        assert len(choices) == 2
        skills, tools = choices
        assert skills.id == "rogue_skills_1"
        assert skills.description == "Choose 2 skills"
        assert skills.choose_count == 2
        assert skills.choice_type is ChoiceType.SKILL
        assert skills.option_set == ExplicitOptions(options=(
            ItemReference(item_id="acrobatics", name="acrobatics"),
            ItemReference(item_id="athletics", name="athletics"),
        ))
        assert tools.id == "rogue_tool_3"
        assert tools.choice_type is ChoiceType.TOOL
        assert tools.option_set == CategoryReference(category_id="artisan-tools")

    def test_proficiency_choices_empty(self):
        assert convert_proficiency_choices(None, "rogue") == []


class TestOptionTrees:
    """Tests for structured API option trees."""

    def test_counted_and_bundle(self, fighter_armor_option):
        record = ExternalChoiceOption.from_dict(fighter_armor_option)
        choice = convert_option_tree_choice(record, "fighter_equipment_1")

        assert choice.id == "fighter_equipment_1"
        assert choice.choose_count == 1
        assert choice.option_set == ExplicitOptions(options=(
            CountedItemReference(item_id="chain-mail", name="Chain Mail", quantity=1),
            ItemBundle(items=(
                ConcreteItem(item=CountedItemReference(item_id="leather-armor", name="Leather Armor", quantity=1)),
                ConcreteItem(item=CountedItemReference(item_id="longbow", name="Longbow", quantity=1)),
                ConcreteItem(item=CountedItemReference(item_id="arrow", name="Arrow", quantity=20)),
            )),
        ))

    def test_nested_category_choices(self, fighter_weapon_option):
        record = ExternalChoiceOption.from_dict(fighter_weapon_option)
        choice = convert_option_tree_choice(record, "fighter_equipment_2")

        bundle, pair = choice.option_set.options
        assert bundle == ItemBundle(items=(
            ChoiceItem(nested=NestedChoice(choice=Choice(
                id="nested_martial-weapons_a_martial_weapon",
                description="a martial weapon",
                choose_count=1,
                choice_type=ChoiceType.EQUIPMENT,
                option_set=CategoryReference(category_id="martial-weapons"),
            ))),
            ConcreteItem(item=CountedItemReference(item_id="shield", name="Shield", quantity=1)),
        ))
        assert isinstance(pair, NestedChoice)
        assert pair.choice.choose_count == 2
        assert pair.choice.option_set == CategoryReference(category_id="martial-weapons")
        assert choice.depth() == 2

    def test_top_level_category(self, fighter_weapon_option):
        nested = fighter_weapon_option["from"]["options"][1]["choice"]
        choice = convert_option_tree_choice(ExternalChoiceOption.from_dict(nested), "c")
        assert choice.option_set == CategoryReference(category_id="martial-weapons")

    def test_nested_option_list_uses_description_category(self):
        """A nested choice without a category index takes its id from the description."""
        nested = ExternalChoiceOption(
            description="a simple weapon",
            option_list=[
                ExternalReferenceOption(reference=ExternalReference(key="club", name="Club")),
                ExternalReferenceOption(reference=ExternalReference(key="dagger", name="Dagger")),
            ],
        )
        option = convert_option(nested)

        assert option.choice.id == "nested_simple-weapons_a_simple_weapon"
        assert option.choice.option_set == ExplicitOptions(options=(
            ItemReference(item_id="club", name="Club"),
            ItemReference(item_id="dagger", name="Dagger"),
        ))

    def test_options_without_reference_dropped(self):
        options = [
            ExternalReferenceOption(reference=None),
            ExternalCountedReferenceOption(count=2, reference=None),
            ExternalCountedReferenceOption(count=2, reference=ExternalReference(key="javelin", name="Javelin")),
            None,
        ]
        assert convert_option_list(options) == [
            CountedItemReference(item_id="javelin", name="Javelin", quantity=2),
        ]

    def test_bundle_reference_gets_quantity_one(self):
        bundle = ExternalMultipleOption(items=[
            ExternalReferenceOption(reference=ExternalReference(key="shield", name="Shield")),
            ExternalReferenceOption(reference=None),
        ])
        assert convert_option(bundle) == ItemBundle(items=(
            ConcreteItem(item=CountedItemReference(item_id="shield", name="Shield", quantity=1)),
        ))

    def test_option_tree_choices(self, fighter_armor_option, fighter_weapon_option):
        records = [ExternalChoiceOption.from_dict(fighter_armor_option), None,
                   ExternalChoiceOption.from_dict(fighter_weapon_option)]
        choices = convert_option_tree_choices(records, "fighter")
        assert [c.id for c in choices] == ["fighter_equipment_1", "fighter_equipment_3"]
        assert convert_option_tree_choices(None, "fighter") == []

    def test_none_record(self):
        assert convert_option_tree_choice(None, "x") is None
        assert convert_option(None) is None

    def test_non_positive_count(self):
        """Counts below one give a plain item, or one of the item inside a bundle."""
        javelin = ExternalReference(key="javelin", name="Javelin")
        assert convert_option(ExternalCountedReferenceOption(count=0, reference=javelin)) == (
            ItemReference(item_id="javelin", name="Javelin")
        )
        bundle = ExternalMultipleOption(items=[ExternalCountedReferenceOption(count=-4, reference=javelin)])
        assert convert_option(bundle) == ItemBundle(items=(
            ConcreteItem(item=CountedItemReference(item_id="javelin", name="Javelin", quantity=1)),
        ))

    def test_nested_id_length_from_settings(self, clean_env):
        clean_env.setenv("CHOICE_ENGINE_NESTED_ID_MAX_LENGTH", "5")
        settings = Settings()
        clean_env.setattr(external_converter, "get_settings", lambda: settings)

        option = convert_option(ExternalChoiceOption(description="a martial weapon", category_index="martial-weapons"))
        assert option.choice.id == "nested_martial-weapons_a_mar"

    def test_nested_choice_with_non_text_description(self):
        option = convert_option(ExternalChoiceOption(description=5, category_index="martial-weapons"))
        assert option.choice.id == "nested_martial-weapons_"
        assert option.choice.description == ""
        assert option.choice.option_set == CategoryReference(category_id="martial-weapons")
