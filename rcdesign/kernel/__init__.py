# rcdesign/kernel - Numeric core of the beam solver
"""
KERNEL
======

DOF bookkeeping, scatter-add assembly, penalty supports and the dense
Gaussian elimination solver. Nothing in here knows about concrete or loads.
"""

from .dof import DOFManager, DOF_BEAM
from .assemble import assemble_global_K, assemble_global_F, add_nodal_load
from .solve import (
    apply_penalty_supports,
    gauss_solve,
    MechanismError,
    StructuralInstability,
    ConfigurationError,
)

__all__ = [
    'DOFManager',
    'DOF_BEAM',
    'assemble_global_K',
    'assemble_global_F',
    'add_nodal_load',
    'apply_penalty_supports',
    'gauss_solve',
    'MechanismError',
    'StructuralInstability',
    'ConfigurationError',
]
