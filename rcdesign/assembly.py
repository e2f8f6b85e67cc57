# model building, global K and load vector assembly

import logging
from typing import List, Tuple

import numpy as np

from .elements import beam_local_stiffness
from .kernel.assemble import assemble_global_K as scatter_K, assemble_global_F, add_nodal_load
from .kernel.dof import DOF_BEAM, DOFManager
from .kernel.solve import ConfigurationError, StructuralInstability
from .loads import fixed_end_actions
from .materials import rectangular_inertia, secant_modulus
from .model import BeamInput, BeamModel, Node, Support, SupportType, merge_positions

logger = logging.getLogger(__name__)


def check_stability(supports: Tuple[Support, ...]) -> None:
    """
    Raise StructuralInstability unless the supports can carry the beam.

    Supports closer than TOLERANCE share one node, so they count once.
    Stable layouts: two or more support locations, or a single location
    with a fixed support.
    """
    locations = merge_positions(s.position for s in supports)
    if len(locations) >= 2:
        return
    if len(locations) == 1 and any(s.type == SupportType.FIXED for s in supports):
        return
    raise StructuralInstability(
        f"Unstable beam: {len(locations)} distinct support location(s). "
        "Add at least 2 supports or 1 fixed support."
    )


def node_positions(span: float, supports: Tuple[Support, ...]) -> List[float]:
    """Sorted node positions {0, span} ∪ supports, merged within TOLERANCE."""
    return merge_positions([0.0, span] + [s.position for s in supports])


def build_beam_model(beam: BeamInput) -> BeamModel:
    """
    Turn a beam input record into an FEM model.

    Raises:
        InputError: malformed input
        StructuralInstability: support layout is not stable
    """
    beam.validate()
    check_stability(beam.supports)

    nodes = tuple(Node(i, x) for i, x in enumerate(node_positions(beam.span, beam.supports)))
    E = secant_modulus(beam.fck)
    I = rectangular_inertia(beam.width, beam.height)

    logger.debug("Beam model: %d nodes, E=%.4g kN/m², I=%.4g m⁴", len(nodes), E, I)

    return BeamModel(
        span=beam.span,
        nodes=nodes,
        E=E,
        I=I,
        supports=beam.supports,
        point_loads=beam.point_loads,
        distributed_loads=beam.distributed_loads,
    )


def element_dof_map(i: int, dof: DOFManager = DOF_BEAM) -> List[int]:
    """DOFs of element i, which joins nodes i and i+1."""
    return dof.element_dof_map([i, i + 1])


def assemble_global_K(model: BeamModel, dof: DOFManager = DOF_BEAM) -> np.ndarray:
    """Assemble the unrestrained global stiffness of the beam."""
    pieces = []
    for i in range(model.n_elements):
        x1, x2 = model.element_span(i)
        pieces.append((element_dof_map(i, dof), beam_local_stiffness(model.EI, x2 - x1)))
    return scatter_K(dof.ndof(len(model.nodes)), pieces)


def assemble_load_vector(model: BeamModel, dof: DOFManager = DOF_BEAM) -> np.ndarray:
    """
    Global load vector: −(fixed-end actions) per element plus nodal point loads.

    Upward forces and counter-clockwise moments are positive, so a downward
    load of P kN sitting on a node contributes −P to its vertical DOF.
    """
    pieces = []
    for i in range(model.n_elements):
        x1, x2 = model.element_span(i)
        fea = fixed_end_actions(x1, x2, model.point_loads, model.distributed_loads)
        pieces.append((element_dof_map(i, dof), -fea))

    F = assemble_global_F(dof.ndof(len(model.nodes)), pieces)

    for p in model.point_loads:
        node_id = model.node_at(p.position)
        if node_id is not None:
            add_nodal_load(F, dof, node_id, np.array([-p.magnitude, 0.0]))

    return F


def support_restraints(model: BeamModel) -> List[Tuple[int, bool]]:
    """
    (node_id, restrain_rotation) for every support.

    Raises:
        ConfigurationError: a support does not sit on a node
    """
    restraints = []
    for s in model.supports:
        node_id = model.node_at(s.position)
        if node_id is None:
            raise ConfigurationError(f"Support at x={s.position} m does not match any node.")
        restraints.append((node_id, s.type == SupportType.FIXED))
    return restraints
