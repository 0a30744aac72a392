# test_viewport.py
# Tests for the view transform and zoom-to-fit framing.

import pytest

from viewport import ViewTransform, fit_to_extent


def test_apply_and_invert():
    t = ViewTransform(2.0, 10.0, -5.0)
    assert t.apply(3, 4) == (16.0, 3.0)
    assert t.invert(16.0, 3.0) == (3.0, 4.0)


def test_zoom_about_point_keeps_point_fixed():
    t = ViewTransform(1.0, 0.0, 0.0)
    zoomed = t.scaled_about(2.0, 100.0, 50.0)
    assert zoomed.k == 2.0
    assert zoomed.apply(*t.invert(100.0, 50.0)) == pytest.approx((100.0, 50.0))


def test_zoom_is_bounded():
    assert ViewTransform(7.0).scaled_about(10.0, 0, 0).k == 8.0
    assert ViewTransform(0.2).scaled_about(0.01, 0, 0).k == 0.1
    at_limit = ViewTransform(8.0, 3.0, 4.0)
    assert at_limit.scaled_about(1.5, 50, 50) == at_limit


def test_pan():
    assert ViewTransform(2.0, 1.0, 1.0).translated(5, -3) == ViewTransform(2.0, 6.0, -2.0)


def test_interpolate_endpoints():
    a = ViewTransform(1.0, 0.0, 0.0)
    b = ViewTransform(4.0, 100.0, 50.0)
    assert a.interpolate(b, 0.0) == a
    assert a.interpolate(b, 1.0) == b
    assert a.interpolate(b, 0.5).k == pytest.approx(2.0)


def test_fit_centres_the_extent():
    t = fit_to_extent([0, 100], [0, 50], 800, 600)
    # Scale capped at the maximum zoom-in factor
    assert t.k == pytest.approx(1.2)
    assert t.apply(50, 25) == pytest.approx((400.0, 300.0))


def test_fit_shrinks_large_extents_into_padding():
    t = fit_to_extent([-1000, 1000], [-10, 10], 800, 600, padding=80)
    assert t.k == pytest.approx(720 / 2000)
    left, _ = t.apply(-1000, 0)
    right, _ = t.apply(1000, 0)
    assert left == pytest.approx(40.0)
    assert right == pytest.approx(760.0)


def test_fit_single_point():
    t = fit_to_extent([5], [5], 800, 600)
    assert t.apply(5, 5) == pytest.approx((400.0, 300.0))
    assert t.k == pytest.approx(1.2)


def test_fit_includes_radii():
    without = fit_to_extent([0, 1000], [0, 0], 800, 600)
    with_radii = fit_to_extent([0, 1000], [0, 0], 800, 600, radii=[100, 100])
    assert with_radii.k < without.k


def test_fit_of_nothing_is_identity():
    assert fit_to_extent([], [], 800, 600) == ViewTransform.identity()
