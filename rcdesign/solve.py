# beam analysis pipeline: model → K, F → penalty supports → solve → forces → diagrams

import logging
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .assembly import (
    assemble_global_K,
    assemble_load_vector,
    build_beam_model,
    support_restraints,
)
from .config import N_SAMPLES
from .diagrams import BeamDiagrams, compute_beam_diagrams
from .kernel.dof import DOF_BEAM
from .kernel.solve import apply_penalty_supports, gauss_solve
from .model import BeamInput, BeamModel
from .post import MemberEndForce, Reaction, compute_member_end_forces, compute_reactions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeamAnalysis:
    """Everything the FEM stage produces for one beam."""
    model: BeamModel
    K: np.ndarray
    F: np.ndarray
    d: np.ndarray
    end_forces: List[MemberEndForce]
    reactions: Dict[int, Reaction]
    diagrams: BeamDiagrams


def solve_beam(beam: BeamInput, n_samples: int = N_SAMPLES) -> BeamAnalysis:
    """
    Run the full analysis for one beam.

    Raises:
        InputError: malformed input
        StructuralInstability: fewer than 2 supports and no single fixed support
        ConfigurationError: a support could not be placed on a node
    """
    model = build_beam_model(beam)

    K = assemble_global_K(model)
    F = assemble_load_vector(model)
    Kp = apply_penalty_supports(K, support_restraints(model), DOF_BEAM)

    d = gauss_solve(Kp, F)
    logger.debug("Solved %d DOFs, max |d| = %.4e", d.size, float(np.max(np.abs(d))) if d.size else 0.0)

    end_forces = compute_member_end_forces(model, d)
    reactions = compute_reactions(model, end_forces)
    diagrams = compute_beam_diagrams(model, d, reactions, n_samples)

    return BeamAnalysis(model, K, F, d, end_forces, reactions, diagrams)
