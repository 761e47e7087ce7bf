"""Tests for render settings validation."""

import pytest

from pathtracer.config import MAX_IMAGE_WIDTH, RenderSettings


class TestRenderSettings:
    """Tests for RenderSettings."""

    def test_defaults(self):
        settings = RenderSettings()
        assert settings.image_width == 400
        assert settings.image_height == 225
        assert settings.samples_per_pixel == 100
        assert settings.max_depth == 50
        assert settings.seed == 0

    def test_height_truncates(self):
        assert RenderSettings(image_width=100, aspect_ratio=16.0 / 9.0).image_height == 56

    def test_make_camera_matches_settings(self):
        settings = RenderSettings(aspect_ratio=2.0, viewport_height=3.0, focal_length=0.5)
        camera = settings.make_camera()

        assert camera.aspect_ratio == 2.0
        assert camera.viewport_height == 3.0
        assert camera.focal_length == 0.5
        assert camera.origin == (0.0, 0.0, 0.0)

    def test_max_depth_zero_allowed(self):
        assert RenderSettings(max_depth=0).max_depth == 0

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"image_width": 0}, "image_width"),
            ({"image_width": MAX_IMAGE_WIDTH + 1}, "image_width"),
            ({"image_width": 1, "aspect_ratio": 2.0}, "image_height"),
            ({"aspect_ratio": 0.0}, "aspect_ratio"),
            ({"samples_per_pixel": 0}, "samples_per_pixel"),
            ({"max_depth": -1}, "max_depth"),
            ({"seed": -1}, "seed"),
            ({"seed": 2**32}, "seed"),
        ],
    )
    def test_invalid_values_rejected(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            RenderSettings(**kwargs)

    def test_settings_are_frozen(self):
        settings = RenderSettings()
        with pytest.raises(AttributeError):
            settings.image_width = 10
