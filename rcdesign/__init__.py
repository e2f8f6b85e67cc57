# rcdesign - Reinforced concrete beam and column design engine
"""
RCDESIGN: Internal Forces and Reinforcement Sizing
==================================================

This package provides:
- a finite-element continuous-beam solver (shear, moment, deflection)
- flexural, minimum-shear and serviceability design of RC beams
- RC column design with slenderness and second-order moments

ARCHITECTURE:
-------------
    kernel/         DOF management, scatter-add assembly, penalty supports, Gauss solver
    model.py        Input records, supports, loads and the derived BeamModel
    materials.py    Concrete/steel constants (NBR 6118)
    elements.py     Beam element stiffness and Hermite shape functions
    loads.py        Unified fixed-end actions for member loads
    assembly.py     Model building, global K and load vector
    post.py         Element end forces and support reactions
    diagrams.py     Span walk producing V, M and deflection samples
    solve.py        Full analysis pipeline (solve_beam)
    checks/         Flexure, shear/serviceability and column checks
    design.py       design_beam / design_column → CalculationResult
    results.py      Findings, metrics, layout and calculation memory
    config.py       Tolerances, safety factors and design limits
"""

from .kernel import DOFManager, MechanismError, StructuralInstability, ConfigurationError
from .model import (
    InputError,
    SupportType,
    SteelGrade,
    BucklingCase,
    Support,
    PointLoad,
    DistributedLoad,
    BeamInput,
    ColumnInput,
)
from .solve import BeamAnalysis, solve_beam
from .design import design_beam, design_column
from .results import CalculationResult, Finding, FindingKind, Metric
from .config import CONFIG, EngineConfig

__version__ = "0.1.0"

__all__ = [
    'DOFManager',
    'MechanismError',
    'StructuralInstability',
    'ConfigurationError',
    'InputError',
    'SupportType',
    'SteelGrade',
    'BucklingCase',
    'Support',
    'PointLoad',
    'DistributedLoad',
    'BeamInput',
    'ColumnInput',
    'BeamAnalysis',
    'solve_beam',
    'design_beam',
    'design_column',
    'CalculationResult',
    'Finding',
    'FindingKind',
    'Metric',
    'CONFIG',
    'EngineConfig',
]
