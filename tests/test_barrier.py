"""
Tests for barrier geometry and hit tests.
"""

import pytest

from daruma.core.barrier import Barrier, BarrierType


PLAYER_Y = 0.2


def make_barrier(kind, gap, y=0.15, height=0.1):
    return Barrier(type=kind, gap_offset=gap, height=height, y_pos=y, hole_width=0.25)


class TestSolidRegions:
    """Test the horizontal solid/open split per barrier type."""

    def test_left_barrier(self):
        """Left barrier is solid up to its gap offset."""
        barrier = make_barrier(BarrierType.LEFT, 0.4)

        assert barrier.hit(0.3, PLAYER_Y)
        assert not barrier.hit(0.5, PLAYER_Y)

    def test_right_barrier(self):
        """Right barrier is solid from its gap offset on."""
        barrier = make_barrier(BarrierType.RIGHT, 0.6)

        assert barrier.hit(0.7, PLAYER_Y)
        assert not barrier.hit(0.5, PLAYER_Y)

    def test_slit_barrier(self):
        """Slit barrier is open only inside the hole."""
        barrier = make_barrier(BarrierType.SLIT, 0.375)

        assert not barrier.hit(0.5, PLAYER_Y)
        assert barrier.hit(0.2, PLAYER_Y)
        assert barrier.hit(0.8, PLAYER_Y)

    @pytest.mark.parametrize("kind,gap,x", [
        (BarrierType.LEFT, 0.4, 0.4),
        (BarrierType.RIGHT, 0.6, 0.6),
        (BarrierType.SLIT, 0.375, 0.375),
        (BarrierType.SLIT, 0.375, 0.625),
    ])
    def test_gap_edges_are_solid(self, kind, gap, x):
        """A player exactly on a gap edge collides."""
        assert make_barrier(kind, gap).hit(x, PLAYER_Y)


class TestVerticalExtent:
    """Test that hits only happen while the barrier overlaps the player row."""

    def test_barrier_below_player(self):
        barrier = make_barrier(BarrierType.SLIT, 0.375, y=0.5)
        assert not barrier.hit(0.0, PLAYER_Y)

    def test_barrier_above_player(self):
        barrier = make_barrier(BarrierType.SLIT, 0.375, y=-0.05)
        assert not barrier.hit(0.0, PLAYER_Y)

    def test_touching_edges_do_not_hit(self):
        """Player row on the barrier's top or bottom edge is not inside it."""
        top_edge = make_barrier(BarrierType.LEFT, 0.5, y=0.2)
        bottom_edge = make_barrier(BarrierType.LEFT, 0.5, y=0.1, height=0.1)

        assert not top_edge.hit(0.3, PLAYER_Y)
        assert not bottom_edge.hit(0.3, 0.2 + 1e-9)


class TestVisibility:
    """Test the retirement predicate."""

    def test_partly_visible(self):
        assert make_barrier(BarrierType.LEFT, 0.5, y=-0.05).is_visible()

    def test_fully_scrolled_off(self):
        assert not make_barrier(BarrierType.LEFT, 0.5, y=-0.1).is_visible()
        assert not make_barrier(BarrierType.LEFT, 0.5, y=-0.3).is_visible()

    def test_below_screen_is_visible(self):
        """Barriers not yet on screen are kept."""
        assert make_barrier(BarrierType.LEFT, 0.5, y=1.5).is_visible()


class TestSpans:
    """Test geometry helpers used by renderers."""

    def test_solid_spans(self):
        assert make_barrier(BarrierType.LEFT, 0.4).solid_spans() == ((0.0, 0.4),)
        assert make_barrier(BarrierType.RIGHT, 0.6).solid_spans() == ((0.6, 1.0),)
        assert make_barrier(BarrierType.SLIT, 0.375).solid_spans() == (
            (0.0, 0.375),
            (0.625, 1.0),
        )

    def test_opening_is_not_blocked(self):
        """Midpoint of the opening is always passable."""
        for kind in BarrierType:
            barrier = make_barrier(kind, 0.45)
            lo, hi = barrier.opening()
            assert not barrier.blocks((lo + hi) / 2)
