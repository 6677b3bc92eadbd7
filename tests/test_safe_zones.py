"""Tests for margin and danger zone lookup."""

import pytest

from modules.safe_zones import Canvas, SafeZoneRegistry, DESKTOP, MOBILE


def test_reference_canvas_margins():
    registry = SafeZoneRegistry(Canvas(1920, 1080))
    assert registry.text_safe_zone(DESKTOP).margin_x == 90
    assert registry.text_safe_zone(MOBILE).margin_y == 90
    assert registry.placement_margin(MOBILE).margin_x == 180
    assert registry.logo_margin().margin_y == 60


def test_unknown_device_falls_back_to_desktop():
    registry = SafeZoneRegistry()
    assert registry.text_safe_zone("tv") == registry.text_safe_zone(DESKTOP)


def test_zones_scale_linearly():
    registry = SafeZoneRegistry(Canvas(1280, 720))
    duration = registry.duration_zone().rect
    assert duration.x == pytest.approx(1750 * 2 / 3)
    assert duration.y == pytest.approx(1000 * 2 / 3)
    assert registry.text_safe_zone(DESKTOP).margin_x == pytest.approx(60)


def test_hard_and_soft_zones():
    registry = SafeZoneRegistry()
    names = {zone.name for zone in registry.danger_zones()}
    assert names == {"duration", "watch_later", "channel_badge"}
    hard = registry.danger_zones(hard_only=True)
    assert [zone.name for zone in hard] == ["duration"]


def test_safe_zone_bounds():
    bounds = SafeZoneRegistry().safe_zone_bounds(DESKTOP)
    assert bounds["left"] == 90
    assert bounds["right"] == 1830
    assert bounds["width"] == 1740
    assert bounds["height"] == 980
    assert bounds["device"] == DESKTOP


def test_uniform_scale_is_smaller_axis():
    assert Canvas(1920, 540).uniform_scale == pytest.approx(0.5)
    assert Canvas(960, 1080).uniform_scale == pytest.approx(0.5)
