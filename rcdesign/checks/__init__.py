# rcdesign/checks - Reinforced concrete design checks
"""Flexure, shear, serviceability and column checks (NBR 6118 style)."""

from .flexure import (
    FaceDesign,
    design_face,
    effective_depth,
    max_bars_per_layer,
    distribute_layers,
    estimated_steel,
    reinforcement_alternatives,
)

from .shear import (
    StirrupCheck,
    DeflectionCheck,
    minimum_stirrup_check,
    deflection_check,
)

from .column import (
    AxisMoments,
    ColumnBars,
    slenderness,
    axis_moments,
    mechanical_ratio,
    required_steel,
    pack_column_bars,
    stirrup_warnings,
    buckled_profile,
)

__all__ = [
    # Flexure
    'FaceDesign',
    'design_face',
    'effective_depth',
    'max_bars_per_layer',
    'distribute_layers',
    'estimated_steel',
    'reinforcement_alternatives',
    # Shear / serviceability
    'StirrupCheck',
    'DeflectionCheck',
    'minimum_stirrup_check',
    'deflection_check',
    # Column
    'AxisMoments',
    'ColumnBars',
    'slenderness',
    'axis_moments',
    'mechanical_ratio',
    'required_steel',
    'pack_column_bars',
    'stirrup_warnings',
    'buckled_profile',
]
