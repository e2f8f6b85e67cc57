# element end forces and support reactions

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .assembly import element_dof_map, support_restraints
from .elements import beam_local_stiffness
from .kernel.dof import DOF_BEAM, DOFManager
from .loads import fixed_end_actions
from .model import BeamModel
from .config import TOLERANCE


@dataclass(frozen=True)
class MemberEndForce:
    """
    Forces on element `element` at its two ends, upward / counter-clockwise
    positive. Equivalently, the actions the element exerts back on its nodes
    with the opposite sign.
    """
    element: int
    Fy_i: float
    Mz_i: float
    Fy_j: float
    Mz_j: float


@dataclass(frozen=True)
class Reaction:
    node: int
    position: float
    Fy: float       # kN, upward positive
    Mz: float       # kN·m, counter-clockwise positive


def element_end_forces(
    model: BeamModel,
    d_global: np.ndarray,
    i: int,
    dof: DOFManager = DOF_BEAM,
) -> MemberEndForce:
    """
    End forces of element i: k_e·d_e + fixed-end actions.

    The fixed-end actions are recomputed with the same function that built
    the load vector, so what was subtracted there is exactly what is added
    back here.
    """
    x1, x2 = model.element_span(i)
    d_elem = d_global[element_dof_map(i, dof)]
    f = beam_local_stiffness(model.EI, x2 - x1) @ d_elem
    f = f + fixed_end_actions(x1, x2, model.point_loads, model.distributed_loads)
    return MemberEndForce(i, float(f[0]), float(f[1]), float(f[2]), float(f[3]))


def compute_member_end_forces(model: BeamModel, d_global: np.ndarray) -> List[MemberEndForce]:
    return [element_end_forces(model, d_global, i) for i in range(model.n_elements)]


def compute_reactions(
    model: BeamModel,
    end_forces: List[MemberEndForce],
) -> Dict[int, Reaction]:
    """
    Support reactions from nodal equilibrium.

    Reaction at node n = Fy_j of the element ending at n + Fy_i of the
    element starting at n (likewise for moments), plus any point load applied
    directly on n, which the node must also carry.

    Returns:
    --------
    Dict[int, Reaction]
        Reactions keyed by node id, supported nodes only, in node order
    """
    supported = sorted({node_id for node_id, _ in support_restraints(model)})
    result = {}
    for n in supported:
        Fy = 0.0
        Mz = 0.0
        if n < model.n_elements:
            Fy += end_forces[n].Fy_i
            Mz += end_forces[n].Mz_i
        if n > 0:
            Fy += end_forces[n - 1].Fy_j
            Mz += end_forces[n - 1].Mz_j

        x = model.nodes[n].x
        Fy += sum(p.magnitude for p in model.point_loads if abs(p.position - x) <= TOLERANCE)

        result[n] = Reaction(n, x, Fy, Mz)
    return result


def nodal_displacements(d_global: np.ndarray, model: BeamModel, dof: DOFManager = DOF_BEAM) -> Dict[int, Dict[str, float]]:
    """Mapping of node id to {'x', 'v', 'rz'}."""
    result = {}
    for node in model.nodes:
        v, rz = d_global[dof.node_dofs(node.id)]
        result[node.id] = {'x': node.x, 'v': float(v), 'rz': float(rz)}
    return result
