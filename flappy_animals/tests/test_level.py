# flappy_animals/tests/test_level.py
"""
Obstacle geometry, collision, scoring and spawn pacing.

Usage (from repo root):
  python -m flappy_animals.tests.test_level
"""

from __future__ import annotations
import sys

from flappy_animals.game.level import Obstacle, ObstacleField, obstacle_size_for_score
from flappy_animals.game.player import Player
from flappy_animals.game.render import CellGrid


def test_size_floor_and_monotonic():
    assert obstacle_size_for_score(0) == 40
    assert obstacle_size_for_score(1) == 40
    assert obstacle_size_for_score(2) == 39
    assert obstacle_size_for_score(50) == 20
    assert obstacle_size_for_score(500) == 20
    prev = obstacle_size_for_score(0)
    for score in range(1, 200):
        size = obstacle_size_for_score(score)
        assert size >= 20
        assert size <= prev, f"size grew at score {score}"
        prev = size


def test_spawn_ranges():
    field = ObstacleField(seed=1)
    for _ in range(500):
        ob = field.spawn(score=0)
        assert 30 <= ob.gap_y < 60
        assert ob.size == 40
        assert ob.x == 120.0
        assert not ob.scored
    assert field.spawn(score=10).size == 35


def test_same_seed_same_layout():
    a = ObstacleField(seed=42)
    b = ObstacleField(seed=42)
    assert [a.spawn(0).gap_y for _ in range(20)] == [b.spawn(0).gap_y for _ in range(20)]


def test_collision_example_below_gap():
    # gap [30, 50); player spans y [10, 24) -> above the opening
    player = Player(x=10, y=10)
    ob = Obstacle(x=15.0, gap_y=40, size=20)
    assert (ob.gap_top, ob.gap_bottom) == (30, 50)
    assert ob.hits(player)


def test_collision_inside_gap_and_edges():
    ob = Obstacle(x=15.0, gap_y=40, size=20)
    assert not ob.hits(Player(x=10, y=32))      # [32, 46) inside [30, 50)
    assert not ob.hits(Player(x=10, y=36))      # bottom edge touches 50 exactly
    assert ob.hits(Player(x=10, y=37))          # pokes out below
    assert ob.hits(Player(x=10, y=29))          # pokes out above
    # column outside the horizontal span
    assert not ob.hits(Player(x=16, y=0))
    assert not ob.hits(Player(x=1, y=0))        # [1, 15) stops short of column 15
    assert ob.hits(Player(x=2, y=0))            # [2, 16) reaches it


def test_scored_exactly_once():
    field = ObstacleField(seed=5)
    field.obstacles = [Obstacle(x=3.4, gap_y=40, size=40)]   # gap [20, 60)
    player = Player(x=2, y=30)
    gains = []
    for _ in range(6):
        gained, hit = field.update(player, score=sum(gains))
        assert not hit
        gains.append(gained)
    # x: 2.9, 2.4 -> column 2 (not passed); 1.9 -> column 1 (passed)
    assert gains == [0, 0, 1, 0, 0, 0]


def test_offscreen_obstacles_removed():
    field = ObstacleField(seed=5)
    field.obstacles = [Obstacle(x=0.4, gap_y=40, size=40), Obstacle(x=60.0, gap_y=40, size=40)]
    field.update(Player(x=2, y=30), score=0)
    assert [ob.x for ob in field.obstacles] == [59.5]


def test_spawn_pacing_follows_spacing():
    field = ObstacleField(seed=3, spacing=40)
    field.obstacles = []
    player = Player(x=2, y=30)
    for _ in range(80):
        field.update(player, score=0)
    assert field.obstacles == []
    field.update(player, score=0)   # distance 40.5 > 40
    assert len(field.obstacles) == 1
    assert field.obstacles[0].x == 120.0
    assert field.distance == 0.0


def test_reset_keeps_one_obstacle_at_edge():
    field = ObstacleField(seed=9)
    field.distance = 12.0
    field.reset(spacing=55)
    assert field.spacing == 55
    assert field.distance == 0.0
    assert len(field.obstacles) == 1 and field.obstacles[0].x == 120.0


def test_obstacle_draws_column():
    grid = CellGrid()
    grid.clear()
    Obstacle(x=50.0, gap_y=40, size=20).draw(grid)
    assert grid.glyphs[0, 50] == "|"
    assert grid.glyphs[29, 50] == "|"
    assert grid.glyphs[30, 50] == " "
    assert grid.glyphs[49, 50] == " "
    assert grid.glyphs[50, 50] == "|"
    assert grid.glyphs[79, 50] == "|"


def main():
    tests = [
        test_size_floor_and_monotonic,
        test_spawn_ranges,
        test_same_seed_same_layout,
        test_collision_example_below_gap,
        test_collision_inside_gap_and_edges,
        test_scored_exactly_once,
        test_offscreen_obstacles_removed,
        test_spawn_pacing_follows_spacing,
        test_reset_keeps_one_obstacle_at_edge,
        test_obstacle_draws_column,
    ]
    try:
        for t in tests:
            t()
            print(f"✓ {t.__name__}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("🎉 Level tests passed")


if __name__ == "__main__":
    main()
