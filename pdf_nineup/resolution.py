"""Render scale selection for source pages."""

from __future__ import annotations

DEFAULT_BASE_SCALE = 4.0
DEFAULT_MAX_DIMENSION = 1400


def choose_render_scale(
    natural_width: float,
    natural_height: float | None = None,
    *,
    base_scale: float = DEFAULT_BASE_SCALE,
    max_dimension: float = DEFAULT_MAX_DIMENSION,
) -> float:
    """Return the scale used to rasterize a page of the given natural size.

    Pages whose width at ``base_scale`` fits within ``max_dimension`` pixels
    are rendered at ``base_scale``; wider pages are scaled down so that the
    raster is exactly ``max_dimension`` pixels wide.

    Only the width is bounded. ``natural_height`` is accepted so callers can
    pass a page size unchanged, but it does not influence the result, which
    means very tall and narrow pages can still produce tall rasters.

    Args:
        natural_width: Page width at scale 1.0 (PDF points).
        natural_height: Page height at scale 1.0, ignored.
        base_scale: Scale used for normally sized pages.
        max_dimension: Maximum raster width in pixels.

    Raises:
        ValueError: If ``natural_width`` is not positive.
    """

    if natural_width <= 0:
        raise ValueError(f"Page width must be positive, got {natural_width!r}")
    if natural_width * base_scale <= max_dimension:
        return base_scale
    return max_dimension / natural_width
