"""Tests for mars_cleanup.sim.agent.AgentController."""

from __future__ import annotations

import pytest

from mars_cleanup.sim.agent import AgentController, TickKind
from mars_cleanup.sim.config import AGENT
from mars_cleanup.sim.models import Point


def _controller(points: list[Point], order: list[int] | None = None) -> AgentController:
    return AgentController(points, order if order is not None else list(range(len(points))),
                           entry=(50.0, 50.0))


class TestArrival:
    def test_target_within_one_step_is_collected_immediately(self) -> None:
        points = [Point(x=52.0, y=50.0)]
        agent = _controller(points)
        outcome = agent.advance(1.0, 1.0)
        assert outcome.kind is TickKind.ARRIVED
        assert outcome.collected
        assert outcome.distance == pytest.approx(2.0)
        assert outcome.point_index == 0
        assert agent.trail_points() == []
        assert points[0].collected

    def test_arrival_sets_decay_fields(self) -> None:
        points = [Point(x=51.0, y=50.0)]
        _controller(points).advance(1.0, 1.0)
        assert points[0].decay_alpha == AGENT.collect_alpha
        assert points[0].decay_scale == AGENT.collect_scale

    def test_last_position_moves_to_target(self) -> None:
        points = [Point(x=51.0, y=51.0)]
        agent = _controller(points)
        agent.advance(1.0, 1.0)
        assert (agent.state.last_x, agent.state.last_y) == (51.0, 51.0)

    def test_leg_measured_from_previous_stop(self) -> None:
        points = [Point(x=50.0, y=60.0), Point(x=50.0, y=90.0)]
        agent = _controller(points)
        legs = []
        while not agent.done:
            outcome = agent.advance(1.0, 1.0)
            if outcome.collected:
                legs.append(outcome.distance)
        assert legs == [pytest.approx(10.0), pytest.approx(30.0)]

    def test_complete_after_route(self) -> None:
        agent = _controller([Point(x=50.5, y=50.0)])
        agent.advance(1.0, 1.0)
        assert agent.advance(1.0, 1.0).kind is TickKind.COMPLETE
        assert agent.advance(1.0, 1.0).complete
        assert agent.progress == 1.0
        assert agent.target is None


class TestMovement:
    def test_step_along_unit_vector(self) -> None:
        agent = _controller([Point(x=50.0 + 30.0, y=50.0 + 40.0)])
        outcome = agent.advance(1.0, 2.0)
        assert outcome.kind is TickKind.MOVED
        assert agent.state.x == pytest.approx(50.0 + 6.0 * 0.6)
        assert agent.state.y == pytest.approx(50.0 + 6.0 * 0.8)
        assert agent.trail_points() == [(agent.state.x, agent.state.y)]

    def test_dt_scales_step(self) -> None:
        agent = _controller([Point(x=150.0, y=50.0)])
        agent.advance(0.5, 1.0)
        assert agent.state.x == pytest.approx(51.5)

    def test_trail_capped_fifo(self) -> None:
        agent = _controller([Point(x=50.0 + 3.0 * 100, y=50.0)])
        for _ in range(35):
            assert agent.advance(1.0, 1.0).kind is TickKind.MOVED
        trail = agent.trail_points()
        assert len(trail) == 30
        assert trail[0] == (50.0 + 3.0 * 6, 50.0)
        assert trail[-1] == (50.0 + 3.0 * 35, 50.0)

    def test_moving_and_arriving_are_exclusive(self) -> None:
        agent = _controller([Point(x=58.0, y=50.0)])
        kinds = []
        while not agent.done:
            kinds.append(agent.advance(1.0, 1.0).kind)
        # 50 -> 53 -> 56, then 2 away: arrive
        assert kinds == [TickKind.MOVED, TickKind.MOVED, TickKind.ARRIVED]
        assert len(agent.trail_points()) == 2


class TestSkipCollected:
    def test_already_collected_target_skipped_in_same_tick(self) -> None:
        points = [Point(x=51.0, y=50.0, collected=True), Point(x=200.0, y=50.0)]
        agent = _controller(points)
        outcome = agent.advance(1.0, 1.0)
        assert outcome.kind is TickKind.MOVED
        assert outcome.point_index == 1
        assert agent.target_index == 1
        assert agent.state.x == pytest.approx(53.0)

    def test_all_collected_completes(self) -> None:
        points = [Point(x=51.0, y=50.0, collected=True)]
        assert _controller(points).advance(1.0, 1.0).complete

    def test_remaining_and_progress(self) -> None:
        points = [Point(x=51.0, y=50.0), Point(x=300.0, y=50.0)]
        agent = _controller(points)
        assert agent.remaining == 2
        agent.advance(1.0, 1.0)
        assert agent.remaining == 1
        assert agent.progress == 0.5
        assert agent.target is points[1]


class TestStepValidation:
    @pytest.mark.parametrize("dt", [0.0, -1.0, float("nan"), float("inf")])
    def test_rejects_non_positive_or_non_finite_dt(self, dt: float) -> None:
        points = [Point(x=150.0, y=50.0)]
        agent = _controller(points)
        with pytest.raises(ValueError):
            agent.advance(dt, 1.0)
        assert (agent.state.x, agent.state.y) == (50.0, 50.0)
        assert agent.trail_points() == []
        assert not points[0].collected

    def test_rejects_non_positive_speed(self) -> None:
        with pytest.raises(ValueError):
            _controller([Point(x=150.0, y=50.0)]).advance(1.0, 0.0)

    def test_agent_on_target_arrives(self) -> None:
        points = [Point(x=50.0, y=50.0)]
        agent = _controller(points)
        outcome = agent.advance(1e-9, 1.0)
        assert outcome.kind is TickKind.ARRIVED
        assert outcome.distance == 0.0
        assert points[0].collected

    def test_finished_route_completes_before_validation(self) -> None:
        agent = _controller([Point(x=50.5, y=50.0, collected=True)])
        assert agent.advance(0.0, 1.0).complete
