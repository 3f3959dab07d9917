"""
scale - Venue proportion system.

Provides:
- Real-world / pixel data contracts
- Dimension resolution for fixed and parametric sizes
- Scale computation, conversions, snapping and fit-to-canvas
- Element render geometry
- Space bounds from walls
- Standard element catalogue
"""

from venueplan.scale.schema import (
    Point,
    SpaceBounds,
    CanvasSize,
    Dimensions,
    FixedDimensions,
    ParametricDimensions,
    DimensionSpec,
    dimension_spec_from_dict,
    ElementType,
    LayoutElement,
    RenderData,
)
from venueplan.scale.dimensions import resolve_dimensions
from venueplan.scale.converter import (
    compute_scale,
    meters_to_pixels,
    pixels_to_meters,
    real_to_canvas,
    canvas_to_real,
    snap_to_grid,
    snap_value_to_grid,
    snap_to_clean_scale,
    next_larger_scale,
    next_smaller_scale,
    calculate_fit_scale,
    calculate_center_offset,
    clamp_zoom,
    round_to_precision,
    ScaleState,
    calculate_scale,
    calculate_zoom_at_point,
    calculate_scale_for_ratio,
)
from venueplan.scale.render import (
    get_element_render_data,
    get_elements_render_data,
    round_render_data,
    round_half_up,
    normalize_rotation,
)
from venueplan.scale.bounds import (
    MeterWall,
    calculate_space_bounds,
    calculate_space_bounds_from_pixel_walls,
    wall_normalization_offset,
    wall_normalization_offset_meters,
    normalize_point,
    add_padding_to_bounds,
    is_point_in_bounds,
    clamp_point_to_bounds,
)
from venueplan.scale.catalog import (
    CatalogEntry,
    ELEMENT_CATALOG,
    get_catalog_entry,
    get_catalog_entries_by_type,
    get_table_entries,
)

__all__ = [
    # Schema
    'Point',
    'SpaceBounds',
    'CanvasSize',
    'Dimensions',
    'FixedDimensions',
    'ParametricDimensions',
    'DimensionSpec',
    'dimension_spec_from_dict',
    'ElementType',
    'LayoutElement',
    'RenderData',
    # Resolver
    'resolve_dimensions',
    # Converter
    'compute_scale',
    'meters_to_pixels',
    'pixels_to_meters',
    'real_to_canvas',
    'canvas_to_real',
    'snap_to_grid',
    'snap_value_to_grid',
    'snap_to_clean_scale',
    'next_larger_scale',
    'next_smaller_scale',
    'calculate_fit_scale',
    'calculate_center_offset',
    'clamp_zoom',
    'round_to_precision',
    'ScaleState',
    'calculate_scale',
    'calculate_zoom_at_point',
    'calculate_scale_for_ratio',
    # Render
    'get_element_render_data',
    'get_elements_render_data',
    'round_render_data',
    'round_half_up',
    'normalize_rotation',
    # Bounds
    'MeterWall',
    'calculate_space_bounds',
    'calculate_space_bounds_from_pixel_walls',
    'wall_normalization_offset',
    'wall_normalization_offset_meters',
    'normalize_point',
    'add_padding_to_bounds',
    'is_point_in_bounds',
    'clamp_point_to_bounds',
    # Catalog
    'CatalogEntry',
    'ELEMENT_CATALOG',
    'get_catalog_entry',
    'get_catalog_entries_by_type',
    'get_table_entries',
]
