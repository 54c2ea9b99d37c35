"""Tests for viewport framing."""

import random

from game.arena.camera import compute_camera


class TestComputeCamera:

    def test_centres_on_player_in_open_field(self):
        cam = compute_camera(1000, 800, 900, 600, 2400, 1800)
        assert (cam.x, cam.y) == (550, 500)

    def test_clamps_at_top_left(self):
        cam = compute_camera(10, 10, 900, 600, 2400, 1800)
        assert (cam.x, cam.y) == (0, 0)

    def test_clamps_at_bottom_right(self):
        cam = compute_camera(2390, 1790, 900, 600, 2400, 1800)
        assert (cam.x, cam.y) == (1500, 1200)

    def test_small_map_is_centred_regardless_of_player(self):
        for px, py in [(0, 0), (100, 50), (400, 300)]:
            cam = compute_camera(px, py, 900, 600, 400, 300)
            assert (cam.x, cam.y) == (-250, -150)

    def test_axes_are_independent(self):
        # Wide but short map: x follows the player, y is centred
        cam = compute_camera(1500, 100, 900, 600, 3000, 400)
        assert cam.x == 1050
        assert cam.y == -100

    def test_map_equal_to_viewport_gives_zero_origin(self):
        cam = compute_camera(123, 456, 900, 600, 900, 600)
        assert (cam.x, cam.y) == (0, 0)

    def test_viewport_never_leaves_large_map(self):
        rng = random.Random(99)
        for _ in range(500):
            vw, vh = rng.uniform(100, 1000), rng.uniform(100, 1000)
            mw, mh = vw + rng.uniform(1, 3000), vh + rng.uniform(1, 3000)
            px, py = rng.uniform(0, mw), rng.uniform(0, mh)
            cam = compute_camera(px, py, vw, vh, mw, mh)
            assert 0 <= cam.x <= mw - vw + 1e-9
            assert 0 <= cam.y <= mh - vh + 1e-9
