"""Unit tests for geometry value types"""

from smartjump.common.types import (
    EDGE_PRIORITY,
    Display,
    DisplayFrame,
    Edge,
    Position,
    Span,
    Velocity,
)


class TestEdge:
    """Test Edge enum"""

    def test_side_edges(self):
        assert Edge.LEFT.isSideEdge()
        assert Edge.RIGHT.isSideEdge()
        assert not Edge.TOP.isSideEdge()
        assert not Edge.BOTTOM.isSideEdge()

    def test_priority_order(self):
        assert EDGE_PRIORITY == (Edge.LEFT, Edge.RIGHT, Edge.TOP, Edge.BOTTOM)


class TestVelocity:
    """Test Velocity helpers"""

    def test_between(self):
        v = Velocity.between(Position(100, 200), Position(115, 190))
        assert v == Velocity(dx=15, dy=-10)

    def test_zero(self):
        assert Velocity.zero() == Velocity(0, 0)


class TestDisplay:
    """Test Display geometry"""

    def test_bounds(self):
        d = Display(id=1, x=1920, y=0, w=1280, h=1024)
        assert d.right == 3200
        assert d.bottom == 1024

    def test_contains_is_half_open(self):
        d = Display(id=1, x=0, y=0, w=1920, h=1080)
        assert d.contains(Position(0, 0))
        assert d.contains(Position(1919, 1079))
        assert not d.contains(Position(1920, 500))
        assert not d.contains(Position(500, 1080))
        assert not d.contains(Position(-1, 0))

    def test_distance_inside_is_zero(self):
        d = Display(id=1, x=0, y=0, w=1920, h=1080)
        assert d.distance_calculate(Position(960, 540)) == 0

    def test_distance_outside(self):
        d = Display(id=1, x=100, y=100, w=100, h=100)
        assert d.distance_calculate(Position(90, 150)) == 10
        assert d.distance_calculate(Position(200, 150)) == 1
        assert d.distance_calculate(Position(90, 80)) == 30
        assert d.distance_calculate(Position(205, 210)) == 6 + 11

    def test_frame_get(self):
        d = Display(id=3, x=10, y=20, w=30, h=40)
        assert d.frame_get() == DisplayFrame(x=10, y=20, w=30, h=40)


class TestSpan:
    """Test Span helpers"""

    def test_contains_inclusive(self):
        s = Span(0, 1080)
        assert s.contains(0)
        assert s.contains(1080)
        assert not s.contains(1081)

    def test_center(self):
        assert Span(600, 1200).center == 900

    def test_distance(self):
        s = Span(600, 1200)
        assert s.distance_calculate(550) == 50
        assert s.distance_calculate(1300) == 100
        assert s.distance_calculate(700) == 0

    def test_clamp_with_inset(self):
        s = Span(0, 1080)
        assert s.clamp(540, 10) == 540
        assert s.clamp(3, 10) == 10
        assert s.clamp(1079, 10) == 1070
