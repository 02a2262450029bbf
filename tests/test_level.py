"""
Tests for level generation, scrolling and collision.
"""

import random

import pytest

from daruma.core.barrier import BarrierType
from daruma.core.config_loader import load_config
from daruma.core.level import Level, barrier_height_for


class FixedRng(random.Random):
    """Always draws the middle anchor and the first allowed type."""

    def uniform(self, a, b):
        return 0.5

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def level(config):
    return Level(config, seed=42)


def collect_barriers(level, steps, delta):
    """Scroll a level and return every barrier seen, in generation order."""
    seen = list(level.barriers)
    for _ in range(steps):
        if level.update(delta):
            seen.append(level.barriers[-1])
    return seen


class TestInitialWindow:
    """Test the freshly built barrier window."""

    def test_seed_barrier_is_centered_slit(self, level, config):
        front = level.barriers[0]
        lane = config.lane

        assert front.type is BarrierType.SLIT
        assert front.gap_offset == pytest.approx(0.5 - lane.hole_width / 2)
        assert front.height == pytest.approx(lane.initial_barrier_height)
        assert front.y_pos == pytest.approx(lane.spawn_y)

    def test_prefilled_to_window_depth(self, level, config):
        """Window spans at least one screen height past the seed barrier."""
        positions = [b.y_pos for b in level.barriers]

        assert len(level) == config.lane.window_size
        assert positions == pytest.approx([1.0, 1.5, 2.0])
        assert positions[-1] - positions[0] >= config.lane.window_depth

    def test_starts_with_zero_mileage(self, level):
        assert level.mileage == 0.0
        assert level.get_mileage() == 0.0
        assert level.score == 0

    def test_center_is_safe(self, level):
        """Spawning at the lane center never collides."""
        assert not level.hit(0.5)

    def test_outside_side_walls(self, level):
        assert level.hit(0.0)
        assert level.hit(0.09)
        assert level.hit(0.91)
        assert level.hit(1.0)

    def test_side_wall_edge_is_inside_lane(self, level):
        assert not level.hit(0.1)
        assert not level.hit(0.9)


class TestGeneration:
    """Test barrier placement rules."""

    def test_fixed_draws(self, config):
        """With fixed draws the type chain and offsets are predictable."""
        level = Level(config, rng=FixedRng())
        types = [b.type for b in level.barriers]
        gaps = [b.gap_offset for b in level.barriers]

        # SLIT -> LEFT (offset from slit rule) -> RIGHT (offset from left rule)
        assert types == [BarrierType.SLIT, BarrierType.LEFT, BarrierType.RIGHT]
        assert gaps == pytest.approx([0.375, 0.375, 0.5])

        # RIGHT -> LEFT uses the mirrored anchor
        level.update(1.5)
        assert level.barriers[-1].type is BarrierType.LEFT
        assert level.barriers[-1].gap_offset == pytest.approx(0.5)

    def test_no_same_side_repeats(self, level):
        """LEFT never follows LEFT and RIGHT never follows RIGHT."""
        seen = collect_barriers(level, 2000, 0.05)

        for prev, new in zip(seen, seen[1:]):
            if prev.type is not BarrierType.SLIT:
                assert new.type is not prev.type

    def test_every_barrier_is_passable(self, level, config):
        """Each barrier leaves an opening between the side walls."""
        wall = config.lane.side_wall_width
        seen = collect_barriers(level, 2000, 0.05)
        assert len(seen) > 100

        for barrier in seen:
            lo, hi = barrier.opening()
            lo, hi = max(lo, wall), min(hi, 1.0 - wall)
            assert lo < hi
            assert not barrier.blocks((lo + hi) / 2)

    def test_all_types_generated(self, level):
        seen = collect_barriers(level, 2000, 0.05)
        assert {b.type for b in seen} == set(BarrierType)

    def test_spacing(self, level, config):
        """Consecutive barriers are one interval apart."""
        for _ in range(50):
            level.update(0.37)
            positions = [b.y_pos for b in level.barriers]
            for a, b in zip(positions, positions[1:]):
                assert b - a == pytest.approx(config.lane.barrier_interval)

    def test_seeded_levels_match(self, config):
        level1 = Level(config, seed=7)
        level2 = Level(config, rng=random.Random(7))

        for _ in range(200):
            level1.update(0.05)
            level2.update(0.05)

        assert [(b.type, b.gap_offset, b.height) for b in level1.barriers] == \
            [(b.type, b.gap_offset, b.height) for b in level2.barriers]


class TestScrolling:
    """Test update, retirement and mileage."""

    def test_mileage_accumulates(self, level):
        for delta in (0.0, 0.01, 0.25, 0.003, 1.0):
            before = level.mileage
            level.update(delta)
            assert level.mileage == before + delta

    def test_update_moves_barriers_up(self, level):
        before = [b.y_pos for b in level.barriers]
        level.update(0.1)
        after = [b.y_pos for b in level.barriers]

        assert after == pytest.approx([y - 0.1 for y in before])

    def test_one_retirement_per_interval(self, config):
        """Scrolling one interval per tick retires exactly one barrier per tick."""
        level = Level(config, seed=3)
        retired = [level.update(0.5) for _ in range(20)]

        # Seed barrier at y=1.0 is still visible at y=0.0, gone at y=-0.5
        assert retired[:2] == [False, False]
        assert all(retired[2:])
        assert sum(retired) == 18
        assert len(level) == config.lane.window_size

    def test_never_more_than_one_retirement(self, config):
        """A huge scroll still retires a single barrier."""
        level = Level(config, seed=3)
        assert level.update(200.0)
        assert len(level) == config.lane.window_size
        assert not level.barriers[0].is_visible()

    def test_window_depth_kept(self, level, config):
        rng = random.Random(11)
        for _ in range(500):
            level.update(rng.uniform(0.0, 0.05))
            front, back = level.barriers[0], level.barriers[-1]
            assert len(level) == config.lane.window_size
            assert back.y_pos - front.y_pos >= config.lane.window_depth - 1e-9

    def test_score_from_mileage(self, level):
        level.update(0.39)
        assert level.score == 1
        level.update(1.0)
        assert level.score == 6


class TestHit:
    """Test lane-wide collision."""

    def test_hit_is_side_effect_free(self, level):
        level.update(0.85)
        barriers_before = [(b.type, b.gap_offset, b.y_pos) for b in level.barriers]
        mileage_before = level.mileage

        results = [level.hit(x / 20) for x in range(21)]
        assert results == [level.hit(x / 20) for x in range(21)]
        assert [(b.type, b.gap_offset, b.y_pos) for b in level.barriers] == barriers_before
        assert level.mileage == mileage_before

    def test_seed_barrier_reaches_player(self, level):
        """Centered slit at the player row: center passes, sides collide."""
        level.update(0.85)  # seed barrier now spans 0.15..0.25

        assert not level.hit(0.5)
        assert level.hit(0.2)
        assert level.hit(0.8)


class TestDifficulty:
    """Test the barrier height ramp."""

    def test_ramp_endpoints(self, config):
        lane = config.lane
        assert barrier_height_for(0.0, lane) == pytest.approx(0.1)
        assert barrier_height_for(50.0, lane) == pytest.approx(0.2)
        assert barrier_height_for(100.0, lane) == pytest.approx(0.3)
        assert barrier_height_for(250.0, lane) == pytest.approx(0.3)

    def test_ramp_is_monotonic(self, config):
        heights = [barrier_height_for(m, config.lane) for m in range(0, 200, 5)]
        assert all(b >= a for a, b in zip(heights, heights[1:]))
        assert max(heights) == pytest.approx(config.lane.max_barrier_height)

    def test_new_barriers_use_current_mileage(self, config):
        level = Level(config, seed=1)
        level.update(200.0)
        assert level.barriers[-1].height == pytest.approx(config.lane.max_barrier_height)
