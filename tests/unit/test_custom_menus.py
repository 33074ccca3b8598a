"""
Unit tests for custom menu specs and the CustomMenuFactory.
"""

import pytest

from menus.custom import CustomMenuFactory, CustomMenuSpec, icon_for_label
from menus.errors import InvalidDefinitionError


class TestCustomMenuSpec:
    """Tests for parsing custom menu specs from manifest objects."""

    @pytest.mark.unit
    def test_from_dict(self):
        """Test parsing label and content."""
        spec = CustomMenuSpec.from_dict({
            "label": "Audio",
            "content": [{"label": "Clicky", "content": []}],
        })
        assert spec.label == "Audio"
        assert spec.content == ({"label": "Clicky", "content": []},)

    @pytest.mark.unit
    def test_content_defaults_to_empty(self):
        """Test that content is optional."""
        assert CustomMenuSpec.from_dict({"label": "Misc"}).content == ()

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [
        {},
        {"label": ""},
        {"label": 5},
        {"label": "Audio", "content": "nope"},
        ["label"],
        7,
    ])
    def test_invalid_specs_raise(self, data):
        """Test that malformed custom menus are rejected."""
        with pytest.raises(InvalidDefinitionError):
            CustomMenuSpec.from_dict(data)


class TestCustomMenuFactory:
    """Tests for minting custom menu descriptors."""

    @pytest.mark.unit
    def test_make_one_uses_index_for_identity(self):
        """Test that the identifier is derived from the manifest index."""
        factory = CustomMenuFactory()
        descriptor = factory.make_one(CustomMenuSpec("Lighting"), 4)
        assert descriptor.identifier == "custom/4"
        assert descriptor.title == "Lighting"
        assert descriptor.icon == "lightbulb"

    @pytest.mark.unit
    def test_identical_specs_get_distinct_identifiers(self):
        """Test that equal specs at positions 0 and 1 stay distinguishable."""
        factory = CustomMenuFactory()
        spec = CustomMenuSpec("Audio")
        first = factory.make_one(spec, 0)
        second = factory.make_one(spec, 1)
        assert first.identifier != second.identifier
        assert first.title == second.title

    @pytest.mark.unit
    def test_make_one_is_stable(self):
        """Test that re-minting with the same inputs gives an equal descriptor."""
        factory = CustomMenuFactory()
        spec = CustomMenuSpec("Audio")
        assert factory.make_one(spec, 2) == factory.make_one(spec, 2)

    @pytest.mark.unit
    def test_make_many_is_positional(self):
        """Test that make_many numbers specs by position."""
        factory = CustomMenuFactory()
        result = factory.make_many([CustomMenuSpec("A"), CustomMenuSpec("B")])
        assert [(d.identifier, d.title) for d in result] == [
            ("custom/0", "A"), ("custom/1", "B"),
        ]
        assert factory.make_many([]) == ()

    @pytest.mark.unit
    def test_pane_factory_and_prefix(self):
        """Test that the pane factory builds the pane handle."""
        factory = CustomMenuFactory(pane_factory=lambda spec: ("pane", spec.label),
                                    id_prefix="device-")
        descriptor = factory.make_one(CustomMenuSpec("Knobs"), 0)
        assert descriptor.pane == ("pane", "Knobs")
        assert descriptor.identifier == "device-0"

    @pytest.mark.unit
    def test_default_pane_is_menu_spec(self):
        """Test that without a pane factory the CustomMenuSpec is the handle."""
        spec = CustomMenuSpec("Knobs")
        assert CustomMenuFactory().make_one(spec, 0).pane is spec


class TestIconForLabel:
    """Tests for icon selection from labels."""

    @pytest.mark.unit
    @pytest.mark.parametrize("label,icon", [
        ("Lighting", "lightbulb"),
        ("RGB Matrix", "lightbulb"),
        ("Audio", "speaker"),
        ("Encoder Settings", "encoder"),
        ("Magic", "microchip"),
    ])
    def test_icon_for_label(self, label, icon):
        assert icon_for_label(label) == icon
