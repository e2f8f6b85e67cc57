# rcdesign/kernel/dof.py
"""
DOF NUMBERING
=============

Global index of local DOF `k` at node `n` is dof_per_node·n + k. For the
continuous beam there are two DOFs per node:

    V  = 0   vertical translation, upward positive
    RZ = 1   rotation, counter-clockwise positive

so node 2's rotation is global DOF 5 and the element joining nodes 2 and 3
owns DOFs [4, 5, 6, 7].
"""

from dataclasses import dataclass
from typing import List, Sequence


V = 0
RZ = 1


@dataclass(frozen=True)
class DOFManager:
    """
    Index arithmetic for a fixed number of DOFs per node.

    >>> DOFManager(dof_per_node=2).idx(1, RZ)
    3
    """
    dof_per_node: int

    def idx(self, node_id: int, local_dof: int) -> int:
        return self.dof_per_node * node_id + local_dof

    def ndof(self, n_nodes: int) -> int:
        """Size of the global system for n_nodes."""
        return self.dof_per_node * n_nodes

    def node_dofs(self, node_id: int) -> List[int]:
        return [self.idx(node_id, k) for k in range(self.dof_per_node)]

    def element_dof_map(self, node_ids: Sequence[int]) -> List[int]:
        """Global DOFs of an element, node by node in the given order."""
        return [i for n in node_ids for i in self.node_dofs(n)]


DOF_BEAM = DOFManager(dof_per_node=2)
