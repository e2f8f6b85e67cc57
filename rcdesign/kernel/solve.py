# rcdesign/kernel/solve.py
"""Penalty boundary conditions and dense Gaussian elimination."""

import logging
from typing import Iterable, Tuple

import numpy as np

from ..config import PENALTY_STIFFNESS, PIVOT_EPS
from .dof import DOFManager, RZ, V

logger = logging.getLogger(__name__)


class MechanismError(RuntimeError):
    """Raised when the structure is unstable."""
    pass


class StructuralInstability(MechanismError):
    """Raised when the support layout cannot hold the beam in equilibrium."""
    pass


class ConfigurationError(RuntimeError):
    """Raised when a support does not coincide with a model node."""
    pass


def apply_penalty_supports(
    K: np.ndarray,
    restraints: Iterable[Tuple[int, bool]],
    dof: DOFManager,
    penalty: float = PENALTY_STIFFNESS,
) -> np.ndarray:
    """
    Return a copy of K with penalty springs on the restrained DOFs.

    Args:
        K: Assembled global stiffness (ndof x ndof)
        restraints: (node_id, restrain_rotation) per support
        dof: DOF manager used to assemble K
        penalty: Spring stiffness added to each restrained diagonal

    Returns:
        Penalised stiffness matrix, same shape as K
    """
    Kp = K.copy()
    for node_id, fixed in restraints:
        iv = dof.idx(node_id, V)
        Kp[iv, iv] += penalty
        if fixed:
            ir = dof.idx(node_id, RZ)
            Kp[ir, ir] += penalty
    return Kp


def gauss_solve(K: np.ndarray, F: np.ndarray, pivot_eps: float = PIVOT_EPS) -> np.ndarray:
    """
    Solve K·d = F by Gaussian elimination with partial pivoting.

    At each step the remaining row with the largest |pivot| is swapped into
    place together with its right-hand side entry. A pivot below pivot_eps
    means the column is already eliminated: the step is skipped and the
    corresponding unknown stays zero during back-substitution.

    Args:
        K: Square coefficient matrix (not modified)
        F: Right-hand side (not modified)
        pivot_eps: Smallest usable pivot magnitude

    Returns:
        d: Solution vector
    """
    M = np.array(K, dtype=float)
    x = np.array(F, dtype=float)
    n = M.shape[0]

    for i in range(n):
        p = i + int(np.argmax(np.abs(M[i:, i])))
        if p != i:
            M[[i, p]] = M[[p, i]]
            x[[i, p]] = x[[p, i]]

        if abs(M[i, i]) < pivot_eps:
            logger.debug("Skipping near-zero pivot at row %d (|p|=%.3e)", i, abs(M[i, i]))
            continue

        factors = M[i + 1:, i] / M[i, i]
        M[i + 1:, i:] -= np.outer(factors, M[i, i:])
        x[i + 1:] -= factors * x[i]

    d = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        if abs(M[i, i]) > pivot_eps:
            d[i] = (x[i] - M[i, i + 1:] @ d[i + 1:]) / M[i, i]
    return d
