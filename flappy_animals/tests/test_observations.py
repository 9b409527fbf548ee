# flappy_animals/tests/test_observations.py
import numpy as np

from flappy_animals.env.observations import build_observation
from flappy_animals.game.level import Obstacle
from flappy_animals.game.player import Player


def test_shape_and_values():
    player = Player.spawn()                                  # (2, 25), v=0
    obs = build_observation(player, [Obstacle(x=62.0, gap_y=40, size=20)])
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (5,)
    expected = [25 / 66, 0.0, 0.5, 30 / 80, 50 / 80]
    assert np.allclose(obs, expected), obs


def test_no_obstacle_sentinel():
    obs = build_observation(Player.spawn(), [])
    assert np.allclose(obs[2:], [1.0, 0.0, 1.0])


def test_nearest_obstacle_ahead_is_used():
    player = Player(x=20, y=0, velocity=-2.5)
    obs = build_observation(player, [
        Obstacle(x=10.0, gap_y=40, size=20),    # behind the player, ignored
        Obstacle(x=80.0, gap_y=50, size=20),
        Obstacle(x=44.0, gap_y=35, size=30),
    ])
    assert np.isclose(obs[1], -1.0)
    assert np.isclose(obs[2], 24 / 120)
    assert np.isclose(obs[3], 20 / 80) and np.isclose(obs[4], 50 / 80)


def test_values_clamped_after_falling():
    player = Player(x=2, y=90, velocity=2.0)
    obs = build_observation(player, [])
    assert obs[0] == 1.0
    assert 0.0 < obs[1] <= 1.0


def main():
    test_shape_and_values()
    test_no_obstacle_sentinel()
    test_nearest_obstacle_ahead_is_used()
    test_values_clamped_after_falling()
    print("✓ observation unit sanity passed")


if __name__ == "__main__":
    main()
