import pytest

from conftest import grid_from
from tierpath.astar import FrontierOrder
from tierpath.errors import InvalidTierError, OutOfBoundsError
from tierpath.sequencer import (DestinationRequest, VisitStatus, bucket_requests,
                                iter_visits, listing, plan)
from tierpath.types import Tier


def test_tier_parse():
    assert Tier.parse(1) is Tier.FIRST
    assert Tier.parse("3") is Tier.THIRD
    assert Tier.parse(Tier.SECOND) is Tier.SECOND
    for bad in (0, 4, -1, "x", None, 1.5, 3.9, 2.0, "1.5", True, False):
        with pytest.raises(InvalidTierError):
            Tier.parse(bad)


def test_bucketing_is_stable_and_drops_bad_tiers():
    reqs = [((0, 1), 3), ((0, 2), 1), ((1, 1), 4), ((2, 2), 1), ((1, 0), 2), ((2, 0), 0),
            ((1, 2), 1.5), ((2, 1), 3.9), ((0, 0), True)]
    buckets, dropped = bucket_requests(reqs)
    assert set(buckets) == {Tier.FIRST, Tier.SECOND, Tier.THIRD}
    assert [r.target for r in buckets[Tier.FIRST]] == [(0, 2), (2, 2)]
    assert [r.target for r in buckets[Tier.SECOND]] == [(1, 0)]
    assert [r.target for r in buckets[Tier.THIRD]] == [(0, 1)]
    assert dropped == [((1, 1), 4), ((2, 0), 0), ((1, 2), 1.5), ((2, 1), 3.9), ((0, 0), True)]
    assert [r.target for r in listing(buckets)] == [(0, 2), (2, 2), (1, 0), (0, 1)]


def test_bucketing_accepts_triples_and_requests():
    buckets, _ = bucket_requests([(2, 2, 2), DestinationRequest((0, 1), Tier.FIRST)])
    assert listing(buckets) == [DestinationRequest((0, 1), Tier.FIRST),
                                DestinationRequest((2, 2), Tier.SECOND)]


def test_strict_bucketing_raises():
    with pytest.raises(InvalidTierError):
        bucket_requests([((0, 0), 1), ((0, 1), 7)], strict=True)


def test_empty_buckets_are_present():
    buckets, dropped = bucket_requests([])
    assert all(buckets[t] == [] for t in Tier)
    assert listing(buckets) == [] and dropped == []


def test_tier_order_and_chaining(open3):
    tour = plan(open3, (0, 0), [((2, 2), 2), ((0, 2), 1)])
    assert [v.request.target for v in tour.visits] == [(0, 2), (2, 2)]
    first, second = tour.visits
    assert first.origin == (0, 0) and first.steps == 2
    assert first.path[0] == (0, 0) and first.path[-1] == (0, 2)
    assert second.origin == (0, 2) and second.steps == 2
    assert second.path[0] == (0, 2) and second.path[-1] == (2, 2)
    assert tour.final_origin == (2, 2)
    assert tour.total_steps == 4 and tour.reached_count == 2


def test_wall_scenario(walled3):
    tour = plan(walled3, (0, 0), [((2, 2), 1)])
    (visit,) = tour.visits
    assert visit.reached and visit.steps == 4
    assert (0, 1) in visit.path or (0, 2) in visit.path


def test_unreachable_keeps_last_good_origin():
    grid = grid_from(
        "S...",
        "..#.",
        ".#.#",
        "..#.",
    )
    reqs = [((0, 3), 1), ((2, 2), 1), ((3, 0), 2), ((1, 2), 3)]
    tour = plan(grid, (0, 0), reqs)
    statuses = [v.status for v in tour.visits]
    assert statuses == [VisitStatus.REACHED, VisitStatus.UNREACHABLE,
                        VisitStatus.REACHED, VisitStatus.UNREACHABLE]
    assert tour.visits[1].path == [] and tour.visits[1].steps is None
    # search after the pocket starts from (0, 3), not from the unreachable (2, 2)
    assert tour.visits[2].origin == (0, 3)
    assert tour.visits[2].path[0] == (0, 3)
    assert tour.final_origin == (3, 0)


def test_tier_one_before_two_before_three():
    grid = grid_from("S" + "." * 5, *["." * 6] * 5)
    reqs = [((5, 5), 3), ((0, 5), 2), ((5, 0), 1), ((1, 1), 3), ((2, 2), 1), ((3, 3), 2)]
    tour = plan(grid, (0, 0), reqs)
    assert [int(v.request.tier) for v in tour.visits] == [1, 1, 2, 2, 3, 3]
    assert [v.request.target for v in tour.visits] == [(5, 0), (2, 2), (0, 5), (3, 3), (5, 5), (1, 1)]
    assert tour.listing == [v.request for v in tour.visits]
    assert all(v.reached for v in tour.visits)
    for prev, nxt in zip(tour.visits, tour.visits[1:]):
        assert nxt.origin == prev.request.target


def test_obstacle_destination_is_unreachable():
    grid = grid_from("S..", ".#.", "...")
    tour = plan(grid, (0, 0), [((1, 1), 1), ((2, 2), 1)])
    assert tour.visits[0].status is VisitStatus.UNREACHABLE
    assert tour.visits[1].reached and tour.visits[1].origin == (0, 0)


def test_out_of_bounds_destination_is_isolated(open3):
    tour = plan(open3, (0, 0), [((5, 5), 1), ((0, 2), 1)])
    assert tour.visits[0].status is VisitStatus.OUT_OF_BOUNDS
    assert tour.visits[1].reached and tour.visits[1].origin == (0, 0)


def test_out_of_bounds_origin_raises(open3):
    with pytest.raises(OutOfBoundsError):
        plan(open3, (3, 3), [((0, 0), 1)])


def test_budget_exhausted_is_recorded():
    grid = grid_from("S" + "." * 9, *["." * 10] * 9)
    tour = plan(grid, (0, 0), [((9, 9), 1), ((0, 1), 2)], max_expansions=5)
    assert tour.visits[0].status is VisitStatus.BUDGET_EXHAUSTED
    assert tour.visits[1].reached and tour.visits[1].origin == (0, 0)


def test_dropped_requests_reported(open3):
    tour = plan(open3, (0, 0), [((0, 1), 5), ((0, 2), 1)])
    assert tour.dropped == [((0, 1), 5)]
    assert [v.request.target for v in tour.visits] == [(0, 2)]


def test_iter_visits_is_lazy(open3):
    ordered = [DestinationRequest((0, 2), Tier.FIRST), DestinationRequest((2, 2), Tier.FIRST)]
    it = iter_visits(open3, (0, 0), ordered, order=FrontierOrder("larger_g"))
    first = next(it)
    assert first.request.target == (0, 2)
    assert next(it).origin == (0, 2)
    with pytest.raises(StopIteration):
        next(it)


def test_strict_bucketing_rejects_fractional_tier():
    with pytest.raises(InvalidTierError):
        bucket_requests([((0, 0), 2.5)], strict=True)
