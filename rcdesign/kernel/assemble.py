# rcdesign/kernel/assemble.py
"""
SCATTER-ADD ASSEMBLY
====================

The beam stiffness and load vector are sums of element pieces. Each piece
arrives as (dof_map, block): the global indices of the element DOFs and the
element matrix or vector in the same order. Assembly knows nothing else
about the element.

    pieces = [(element_dof_map(i), beam_local_stiffness(EI, L)) for i ...]
    K = assemble_global_K(ndof, pieces)
"""

from typing import Iterable, List, Tuple

import numpy as np

from .dof import DOFManager


Piece = Tuple[List[int], np.ndarray]


def _check_block(dof_map: List[int], block: np.ndarray, ndim: int) -> None:
    n = len(dof_map)
    expected = (n,) * ndim
    if block.shape != expected:
        raise ValueError(f"Block of shape {block.shape} does not match {n} element DOFs.")


def assemble_global_K(ndof: int, pieces: Iterable[Piece]) -> np.ndarray:
    """
    Sum element stiffness blocks into a dense ndof × ndof matrix.

    The result is symmetric and singular until supports are added.
    """
    K = np.zeros((ndof, ndof), dtype=float)
    for dof_map, ke in pieces:
        _check_block(dof_map, ke, 2)
        K[np.ix_(dof_map, dof_map)] += ke
    return K


def assemble_global_F(ndof: int, pieces: Iterable[Piece]) -> np.ndarray:
    """Sum element load vectors (equivalent nodal loads) into a length-ndof vector."""
    F = np.zeros(ndof, dtype=float)
    for dof_map, fe in pieces:
        _check_block(dof_map, fe, 1)
        np.add.at(F, dof_map, fe)
    return F


def add_nodal_load(F: np.ndarray, dof: DOFManager, node_id: int, values: np.ndarray) -> None:
    """
    Add [Fy, Mz] at a node to F in place.

    >>> F = np.zeros(4)
    >>> add_nodal_load(F, DOFManager(2), 1, np.array([-10.0, 0.0]))
    >>> float(F[2])
    -10.0
    """
    F[dof.node_dofs(node_id)] += values
