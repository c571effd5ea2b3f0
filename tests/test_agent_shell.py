"""Tests for the agent shell: act, consume and the per-step state machine."""

import logging

import pytest
from crusoe import Action, Agent, CoreConfig, Good, GoodsUnit, PartialGoodsUnit, Stock


class ScriptedAgent(Agent):
    """Plays back a fixed list of actions, then rests."""

    AGENT_NAME = "Scripted"

    def __init__(self, actions: list[Action] | None = None, **kwargs) -> None:
        super().__init__(1, **kwargs)
        self.script = list(actions or [])

    def choose_action(self) -> Action:
        if self.script:
            return self.script.pop(0)
        return Action.leisure()


def _make_agent(actions: list[Action] | None = None, **holdings: int) -> ScriptedAgent:
    agent = ScriptedAgent(actions)
    for name, qty in holdings.items():
        agent.acquire(GoodsUnit.new(Good(name)), qty)
    return agent


class TestAgentState:
    def test_defaults(self):
        agent = ScriptedAgent()
        assert agent.id == 1
        assert agent.is_alive
        assert agent.stock == Stock()
        assert agent.config == CoreConfig()
        assert agent.time == 0

    def test_abstract_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            Agent(1)  # type: ignore[abstract]

    def test_set_stock_and_liveness(self):
        agent = ScriptedAgent()
        stock = Stock()
        stock.add(GoodsUnit.new(Good.FISH), 2)
        agent.set_stock(stock)
        agent.set_liveness(False)
        assert agent.stock is stock
        assert not agent.is_alive

    def test_acquire_partial(self):
        agent = ScriptedAgent()
        agent.acquire_partial(PartialGoodsUnit(Good.BOAT, 4))
        assert agent.get_partial(Good.BOAT) == PartialGoodsUnit(Good.BOAT, 4)
        assert agent.get_partial(Good.AXE) is None

    def test_productivity_follows_stock(self):
        agent = _make_agent(spear=1)
        assert agent.productivity(Good.FISH).quantity() == 10

    def test_clone_is_independent(self):
        agent = _make_agent(berries=5)
        agent.step_forward(Action.leisure())
        dummy = agent.clone()
        dummy.acquire(GoodsUnit.new(Good.FISH), 3)
        assert not agent.stock.contains(Good.FISH)
        assert dummy.action_history == []
        assert dummy.reward_history == []
        assert len(agent.action_history) == 1
        assert type(dummy) is ScriptedAgent


class TestAct:
    def test_immediate_production(self):
        agent = _make_agent()
        assert agent.act(Action.produce(Good.BERRIES)) == 4
        assert agent.stock.units == {GoodsUnit(Good.BERRIES, 10): 4}

    def test_production_wears_tool(self):
        agent = _make_agent(spear=1)
        agent.act(Action.produce(Good.FISH))
        assert agent.stock.units == {GoodsUnit(Good.SPEAR, 4): 1, GoodsUnit(Good.FISH, 2): 10}

    def test_infeasible_production_has_no_effect(self):
        agent = _make_agent(berries=1)
        assert agent.act(Action.produce(Good.TIMBER)) == 0
        assert agent.stock.units == {GoodsUnit(Good.BERRIES, 10): 1}

    def test_leisure_has_no_effect(self):
        agent = _make_agent(berries=1)
        assert agent.act(Action.leisure()) == 0
        assert agent.stock.units == {GoodsUnit(Good.BERRIES, 10): 1}

    def test_two_step_good_from_material(self):
        agent = _make_agent(timber=3, axe=1)

        assert agent.act(Action.produce(Good.SMOKER)) == 0
        assert agent.get_partial(Good.SMOKER) == PartialGoodsUnit(Good.SMOKER, 1)
        assert agent.stock.count_material_units(Good.TIMBER) == 2

        assert agent.act(Action.produce(Good.SMOKER)) == 1
        assert agent.get_partial(Good.SMOKER) is None
        assert agent.stock.units_of(Good.SMOKER) == [GoodsUnit(Good.SMOKER, 5)]
        assert agent.stock.count_material_units(Good.TIMBER) == 1
        assert agent.stock.units_of(Good.AXE) == [GoodsUnit(Good.AXE, 5)]

    def test_multi_step_good_completes_in_its_duration(self):
        agent = _make_agent()
        agent.act(Action.produce(Good.AXE))
        assert not agent.stock.contains(Good.AXE)
        agent.act(Action.produce(Good.AXE))
        assert agent.stock.units == {GoodsUnit(Good.AXE, 5): 1}

    def test_smoked_fish_converts_all_fish(self):
        agent = _make_agent(smoker=1, fish=7)
        assert agent.act(Action.produce(Good.SMOKED_FISH)) == 7
        assert agent.stock.units == {GoodsUnit(Good.SMOKER, 4): 1, GoodsUnit(Good.SMOKED_FISH, 20): 7}

    def test_insufficient_stock_is_logged_and_ignored(self, monkeypatch, caplog):
        agent = _make_agent(spear=1)

        def fail(action):
            stock = Stock()
            stock.remove(GoodsUnit.new(Good.SPEAR), 1)

        monkeypatch.setattr(agent.stock, "degrade_capital_stock", fail)
        with caplog.at_level(logging.WARNING, logger="crusoe.agent.base"):
            assert agent.act(Action.produce(Good.FISH)) == 0
        assert not agent.stock.contains(Good.FISH)
        assert "cannot produce fish" in caplog.text


class TestConsume:
    def test_consume_enough(self):
        agent = _make_agent(berries=5)
        assert agent.consume(3)
        assert agent.stock.count_units(Good.BERRIES) == 2

    def test_consume_soonest_to_expire_first(self):
        agent = _make_agent(berries=5, fish=2)
        assert agent.consume(3)
        assert agent.stock.units == {GoodsUnit(Good.BERRIES, 10): 4}

    def test_consume_too_little_eats_what_there_is(self):
        agent = _make_agent(berries=2)
        assert not agent.consume(3)
        assert agent.stock.units == {}

    def test_consume_ignores_capital_goods(self):
        agent = _make_agent(spear=1, timber=4)
        assert not agent.consume(3)
        assert agent.stock.count_units(Good.SPEAR) == 1
        assert agent.stock.count_material_units(Good.TIMBER) == 4


class TestStepForward:
    def test_leisure_step(self):
        agent = _make_agent(berries=5)
        reward = agent.step_forward(Action.leisure())
        assert reward == 1
        assert agent.is_alive
        assert agent.stock.units == {GoodsUnit(Good.BERRIES, 9): 2}

    def test_production_step(self):
        agent = _make_agent()
        reward = agent.step_forward(Action.produce(Good.BERRIES))
        assert reward == 0
        assert agent.is_alive
        assert agent.stock.units == {GoodsUnit(Good.BERRIES, 9): 1}

    def test_histories(self):
        agent = _make_agent(berries=5)
        agent.step_forward(Action.leisure())
        assert agent.action_history == [Action.leisure()]
        assert agent.reward_history == [1]
        # Recorded after consumption, before overnight aging.
        assert agent.stock_history == [Stock(units={GoodsUnit(Good.BERRIES, 10): 2})]
        assert agent.time == 1

    def test_chooses_action_when_none_given(self):
        agent = _make_agent([Action.produce(Good.BERRIES)])
        agent.step_forward()
        assert agent.action_history == [Action.produce(Good.BERRIES)]

    def test_starvation(self, caplog):
        agent = _make_agent(berries=1)
        with caplog.at_level(logging.INFO, logger="crusoe.agent.base"):
            reward = agent.step_forward(Action.leisure())
        assert reward == -10
        assert not agent.is_alive
        assert "died" in caplog.text

    def test_dead_agent_is_a_no_op(self):
        agent = _make_agent()
        agent.step_forward(Action.leisure())
        assert agent.step_forward(Action.produce(Good.BERRIES)) is None
        assert len(agent.action_history) == 1
        assert agent.stock.units == {}

    def test_rewards_follow_config(self):
        agent = ScriptedAgent(config=CoreConfig(positive_reward=5, negative_reward=-3))
        agent.acquire(GoodsUnit.new(Good.BERRIES), 3)
        assert agent.step_forward(Action.leisure()) == 5
        assert agent.step_forward(Action.leisure()) == -3

    def test_interrupted_partial_is_lost(self):
        agent = _make_agent(timber=3, berries=9)
        agent.step_forward(Action.produce(Good.SMOKER))
        assert agent.get_partial(Good.SMOKER) == PartialGoodsUnit(Good.SMOKER, 1)
        agent.step_forward(Action.leisure())
        assert agent.get_partial(Good.SMOKER) is None
        assert not agent.stock.contains(Good.SMOKER)

    def test_continued_partial_completes(self):
        agent = _make_agent(timber=3, berries=9)
        agent.step_forward(Action.produce(Good.SMOKER))
        agent.step_forward(Action.produce(Good.SMOKER))
        assert agent.stock.units_of(Good.SMOKER) == [GoodsUnit(Good.SMOKER, 5)]
        assert agent.stock.count_material_units(Good.TIMBER) == 1

    def test_smoker_keeps_fish_fresh(self):
        agent = _make_agent(smoker=1, fish=9)
        agent.step_forward(Action.leisure())
        agent.step_forward(Action.leisure())
        agent.step_forward(Action.leisure())
        assert agent.is_alive
        assert agent.stock.units == {GoodsUnit(Good.SMOKER, 5): 1}
