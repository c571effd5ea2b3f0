"""Tests for goods units, partial units and actions."""

import dataclasses

import pytest
from crusoe import Action, ActionKind, Good, GoodsUnit, PartialGoodsUnit


class TestGoodsUnit:
    def test_new_uses_catalogue_lifetime(self):
        assert GoodsUnit.new(Good.BERRIES) == GoodsUnit(Good.BERRIES, 10)
        assert GoodsUnit.new(Good.SPEAR).remaining_lifetime == 5

    def test_aged(self):
        assert GoodsUnit(Good.BERRIES, 3).aged() == GoodsUnit(Good.BERRIES, 2)
        assert GoodsUnit(Good.BERRIES, 3).aged(2) == GoodsUnit(Good.BERRIES, 1)

    def test_aged_to_zero_is_gone(self):
        assert GoodsUnit(Good.BERRIES, 1).aged() is None

    def test_sort_key_lifetime_then_catalogue_order(self):
        units = [GoodsUnit(Good.BERRIES, 2), GoodsUnit(Good.FISH, 2), GoodsUnit(Good.BERRIES, 1)]
        assert sorted(units, key=GoodsUnit.sort_key) == [
            GoodsUnit(Good.BERRIES, 1),
            GoodsUnit(Good.BERRIES, 2),
            GoodsUnit(Good.FISH, 2),
        ]

    def test_frozen(self):
        unit = GoodsUnit.new(Good.FISH)
        with pytest.raises(dataclasses.FrozenInstanceError):
            unit.remaining_lifetime = 1  # type: ignore[misc]


class TestPartialGoodsUnit:
    def test_new_starts_at_full_duration(self):
        partial = PartialGoodsUnit.new(Good.BOAT)
        assert partial.time_to_completion == 10
        assert partial.duration == 10

    def test_new_rejects_immediate_goods(self):
        with pytest.raises(ValueError):
            PartialGoodsUnit.new(Good.BERRIES)

    def test_increment_production(self):
        partial = PartialGoodsUnit.new(Good.BOAT).increment_production()
        assert partial is not None
        assert partial.time_to_completion == 9

    def test_increment_to_completion(self):
        assert PartialGoodsUnit(Good.SMOKER, 1).increment_production() is None

    def test_step_forward_continued_is_unchanged(self):
        partial = PartialGoodsUnit(Good.BOAT, 4)
        assert partial.step_forward(continued=True) == partial

    def test_step_forward_skipped_loses_a_step(self):
        partial = PartialGoodsUnit(Good.BOAT, 4)
        assert partial.step_forward(continued=False) == PartialGoodsUnit(Good.BOAT, 5)

    def test_step_forward_abandoned_at_full_duration(self):
        assert PartialGoodsUnit(Good.BOAT, 9).step_forward(continued=False) is None
        assert PartialGoodsUnit(Good.SMOKER, 1).step_forward(continued=False) is None


class TestAction:
    def test_produce(self):
        action = Action.produce(Good.FISH)
        assert action.kind == ActionKind.PRODUCE_GOOD
        assert action.good == Good.FISH
        assert action.produces(Good.FISH)
        assert not action.produces(Good.BERRIES)

    def test_leisure(self):
        action = Action.leisure()
        assert action.kind == ActionKind.LEISURE
        assert action.good is None
        assert not action.produces(Good.FISH)

    def test_produce_requires_good(self):
        with pytest.raises(ValueError):
            Action(kind=ActionKind.PRODUCE_GOOD)

    def test_leisure_rejects_good(self):
        with pytest.raises(ValueError):
            Action(kind=ActionKind.LEISURE, good=Good.FISH)

    def test_all_actions(self):
        actions = Action.all()
        assert len(actions) == len(Good) + 1
        assert actions[0] == Action.produce(Good.BERRIES)
        assert actions[-1] == Action.leisure()

    def test_hashable_and_equal(self):
        assert {Action.produce(Good.FISH), Action.produce(Good.FISH)} == {Action.produce(Good.FISH)}

    def test_str(self):
        assert str(Action.produce(Good.FISH)) == "produce_good(fish)"
        assert str(Action.leisure()) == "leisure"
