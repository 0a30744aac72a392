"""
Viewport transform: translate plus uniform scale applied to the whole drawing group.
"""

import math

from constants import FIT_MAX_SCALE, FIT_PADDING, MAX_ZOOM, MIN_ZOOM


class ViewTransform:
    """Maps data coordinates to screen coordinates: screen = data * k + (x, y)"""

    def __init__(self, k=1.0, x=0.0, y=0.0):
        self.k = float(k)
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def centered(cls, cx, cy, scale, width, height):
        """Put data point (cx, cy) in the middle of a width x height viewport"""
        return cls(scale, width / 2.0 - scale * cx, height / 2.0 - scale * cy)

    def apply(self, px, py):
        return px * self.k + self.x, py * self.k + self.y

    def invert(self, sx, sy):
        return (sx - self.x) / self.k, (sy - self.y) / self.k

    def translated(self, dx, dy):
        """Pan by a screen-space offset"""
        return ViewTransform(self.k, self.x + dx, self.y + dy)

    def scaled_about(self, factor, sx, sy, min_zoom=MIN_ZOOM, max_zoom=MAX_ZOOM):
        """Zoom by `factor` keeping screen point (sx, sy) fixed, within the zoom limits"""
        k = max(min_zoom, min(max_zoom, self.k * factor))
        if k == self.k:
            return ViewTransform(self.k, self.x, self.y)
        px, py = self.invert(sx, sy)
        return ViewTransform(k, sx - px * k, sy - py * k)

    def interpolate(self, other, t):
        """Blend toward `other`; scale is interpolated geometrically"""
        t = max(0.0, min(1.0, t))
        if self.k > 0 and other.k > 0:
            k = math.exp(math.log(self.k) * (1 - t) + math.log(other.k) * t)
        else:
            k = self.k + (other.k - self.k) * t
        return ViewTransform(k, self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def __eq__(self, other):
        if not isinstance(other, ViewTransform):
            return NotImplemented
        return (math.isclose(self.k, other.k, abs_tol=1e-9) and math.isclose(self.x, other.x, abs_tol=1e-9)
                and math.isclose(self.y, other.y, abs_tol=1e-9))

    def __repr__(self):
        return f"ViewTransform(k={self.k:.4f}, x={self.x:.2f}, y={self.y:.2f})"


def fit_to_extent(xs, ys, width, height, padding=FIT_PADDING, max_scale=FIT_MAX_SCALE, radii=None):
    """Transform framing every point inside the viewport.

    The centre is the midpoint of the x/y extents; the scale is the largest
    that keeps the extents inside the viewport minus `padding`, never above
    `max_scale`. Degenerate extents count as one unit wide.

    Args:
        xs, ys: data coordinates
        width, height: viewport size in pixels
        radii: optional per-point radius added to the extents
    """
    xs = list(xs)
    ys = list(ys)
    if not xs or not ys:
        return ViewTransform.identity()
    if radii is None:
        radii = [0.0] * len(xs)
    x0 = min(x - r for x, r in zip(xs, radii))
    x1 = max(x + r for x, r in zip(xs, radii))
    y0 = min(y - r for y, r in zip(ys, radii))
    y1 = max(y + r for y, r in zip(ys, radii))
    cx = (x0 + x1) / 2.0
    cy = (y0 + y1) / 2.0
    w = max((x1 - x0) or 1.0, 1.0)
    h = max((y1 - y0) or 1.0, 1.0)
    scale = min((width - padding) / w, (height - padding) / h, max_scale)
    # A viewport smaller than the padding would give a negative scale
    scale = max(scale, MIN_ZOOM)
    return ViewTransform.centered(cx, cy, scale, width, height)
