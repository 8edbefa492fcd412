"""
Tests for table layout validation.
"""

import pytest

from ..engine_core.errors import LayoutValidationError
from ..rules.actions import flip_into
from ..rules.schema import PileSettings, TableLayout


class TestTableLayout:
    """Tests for TableLayout.from_config."""

    def test_valid_layout(self):
        layout = TableLayout.from_config({
            "piles": ["deck", "slot1", "slot2"],
            "pile_groups": {"slot": ["slot1", "slot2"]},
            "pile_settings": {
                "*": {"display": "stacked"},
                ".slot": {"display": "show_top_1"},
                "deck": {"actions": [flip_into("slot1")]},
            },
        })
        assert layout.piles == ["deck", "slot1", "slot2"]
        assert layout.pile_groups["slot"] == ["slot1", "slot2"]
        assert isinstance(layout.pile_settings[".slot"], PileSettings)
        assert len(layout.pile_settings["deck"].actions) == 1

    def test_none_is_empty(self):
        layout = TableLayout.from_config(None)
        assert layout.piles == []
        assert layout.pile_groups == {}

    def test_layout_passes_through(self):
        layout = TableLayout(piles=["a"])
        assert TableLayout.from_config(layout) is layout

    @pytest.mark.parametrize("pile_id", [".a", "*", ""])
    def test_reserved_pile_ids(self, pile_id):
        with pytest.raises(LayoutValidationError) as exc:
            TableLayout.from_config({"piles": [pile_id]})
        assert "invalid pile id" in str(exc.value)

    def test_duplicate_pile_ids(self):
        with pytest.raises(LayoutValidationError) as exc:
            TableLayout.from_config({"piles": ["a", "b", "a"]})
        assert "duplicate pile id 'a'" in str(exc.value)

    def test_group_names_unknown_pile(self):
        with pytest.raises(LayoutValidationError) as exc:
            TableLayout.from_config({"piles": ["a"], "pile_groups": {"g": ["a", "b"]}})
        assert "unknown pile 'b'" in str(exc.value)

    def test_settings_name_unknown_group(self):
        with pytest.raises(LayoutValidationError) as exc:
            TableLayout.from_config({"piles": ["a"], "pile_settings": {".nope": {}}})
        assert "unknown pile group 'nope'" in str(exc.value)

    def test_settings_name_unknown_pile(self):
        with pytest.raises(LayoutValidationError) as exc:
            TableLayout.from_config({"piles": ["a"], "pile_settings": {"b": {}}})
        assert "unknown pile 'b'" in str(exc.value)

    def test_every_problem_reported(self):
        with pytest.raises(LayoutValidationError) as exc:
            TableLayout.from_config({
                "piles": ["a"],
                "pile_groups": {"g": ["x"]},
                "pile_settings": {"y": {}},
            })
        message = str(exc.value)
        assert "'x'" in message and "'y'" in message

    def test_actions_must_be_pile_actions(self):
        with pytest.raises(LayoutValidationError):
            TableLayout.from_config({
                "piles": ["a"],
                "pile_settings": {"a": {"actions": ["flip"]}},
            })


class TestPileSettings:
    """Tests for PileSettings."""

    def test_defaults(self):
        settings = PileSettings()
        assert settings.display is None
        assert settings.actions == []
        assert settings.playable is None

    def test_only_set_fields_tracked(self):
        settings = PileSettings(display="deck")
        assert settings.model_fields_set == {"display"}

    def test_callable_overrides(self):
        def always(game, card):
            return True

        settings = PileSettings(playable=always)
        assert settings.playable is always
