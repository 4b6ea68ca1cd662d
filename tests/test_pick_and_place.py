from collections import namedtuple

import pytest

from ibomscope.pick_and_place import Layer, PickAndPlace, PlacementStep

Comp = namedtuple("Comp", "reference value footprint layer")


@pytest.fixture
def components():
    return [
        Comp("R2", "10k", "R_0603", "F"),
        Comp("C1", "100nF", "C_0402", "B"),
        Comp("R1", "10k", "R_0603", Layer.FRONT),
        Comp("U1", "STM32", "LQFP-48_7x7mm", "F"),
    ]


@pytest.fixture
def pnp(components):
    p = PickAndPlace()
    p.load_components(components)
    return p


def refs(p):
    return [s.reference for s in p.steps]


def test_load_groups_by_value_then_reference(pnp):
    assert refs(pnp) == ["C1", "R1", "R2", "U1"]
    assert [s.order for s in pnp.steps] == list(range(4))
    assert pnp.steps[0].layer is Layer.BACK


def test_load_emits_first_step_and_progress(components):
    p = PickAndPlace()
    first, progress = [], []
    p.current_step_changed.connect(first.append)
    p.progress_changed.connect(lambda placed, total: progress.append((placed, total)))
    p.load_components(components)
    assert first[0].reference == "C1"
    assert progress == [(0, len(components))]


def test_mark_placed_advances(pnp):
    placed = []
    pnp.step_placed.connect(placed.append)
    pnp.mark_placed()
    assert placed == ["C1"]
    assert pnp.current_index == 1
    assert pnp.current_step().reference == "R1"
    assert pnp.placed_count() == 1
    assert not pnp.is_complete()


def test_placing_everything_completes(pnp):
    done = []
    pnp.all_placed.connect(lambda: done.append(True))
    for _ in range(pnp.total_steps()):
        pnp.mark_placed()
    assert pnp.is_complete()
    assert done == [True]
    assert pnp.current_step() == PlacementStep()
    pnp.mark_placed()
    assert pnp.placed_count() == pnp.total_steps()


def test_skip_stops_at_last_step(pnp):
    for _ in range(10):
        pnp.skip()
    assert pnp.current_index == pnp.total_steps() - 1


def test_go_back_stops_at_first(pnp):
    pnp.go_back()
    assert pnp.current_index == 0
    pnp.skip()
    pnp.go_back()
    assert pnp.current_index == 0


def test_skipped_step_leaves_board_incomplete(pnp):
    pnp.skip()
    for _ in range(pnp.total_steps()):
        pnp.mark_placed()
    assert pnp.placed_count() == pnp.total_steps() - 1
    assert not pnp.is_complete()


def test_reset_clears_placements(pnp):
    pnp.mark_placed()
    pnp.mark_placed()
    pnp.reset()
    assert pnp.placed_count() == 0
    assert pnp.current_index == 0


def test_sort_by_footprint_size(pnp):
    pnp.sort_by_footprint_size()
    lengths = [len(s.footprint) for s in pnp.steps]
    assert lengths == sorted(lengths)
    assert pnp.steps[-1].reference == "U1"
    assert [s.order for s in pnp.steps] == list(range(4))


def test_sort_by_position_follows_order(pnp):
    before = refs(pnp)
    pnp.sort_by_position()
    assert refs(pnp) == before


def test_empty_list_is_complete_and_has_empty_step():
    p = PickAndPlace()
    p.load_components([])
    assert p.total_steps() == 0
    assert p.is_complete()
    assert p.current_step().reference == ""