# Supports, loads, input records and the derived beam model (dataclasses)

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .config import GAMMA_F, TOLERANCE


class InputError(ValueError):
    """Raised when an input record is malformed or contradictory."""
    pass


class SupportType(str, Enum):
    PIN = "pin"          # restrains vertical translation
    ROLLER = "roller"    # restrains vertical translation
    FIXED = "fixed"      # restrains vertical translation and rotation


class SteelGrade(str, Enum):
    CA25 = "CA-25"
    CA50 = "CA-50"
    CA60 = "CA-60"

    @property
    def fyk(self) -> float:
        """Characteristic yield strength (MPa)."""
        return {"CA-25": 250.0, "CA-50": 500.0, "CA-60": 600.0}[self.value]


class BucklingCase(str, Enum):
    PINNED_PINNED = "pinned-pinned"
    FIXED_FREE = "fixed-free"
    FIXED_PINNED = "fixed-pinned"
    FIXED_FIXED = "fixed-fixed"

    @property
    def k(self) -> float:
        """Effective length factor."""
        return {
            "pinned-pinned": 1.0,
            "fixed-free": 2.0,
            "fixed-pinned": 0.7,
            "fixed-fixed": 0.5,
        }[self.value]


def merge_positions(positions: Iterable[float]) -> List[float]:
    """Sorted positions, with points closer than TOLERANCE merged into the first."""
    merged: List[float] = []
    for x in sorted(positions):
        if not merged or x - merged[-1] > TOLERANCE:
            merged.append(x)
    return merged


@dataclass(frozen=True)
class Support:
    position: float     # m
    type: SupportType = SupportType.PIN


@dataclass(frozen=True)
class PointLoad:
    position: float     # m
    magnitude: float    # kN, downward positive


@dataclass(frozen=True)
class DistributedLoad:
    """Trapezoidal line load varying linearly from start to end (kN/m, downward positive)."""
    start: float
    end: float
    start_magnitude: float
    end_magnitude: float

    @classmethod
    def uniform(cls, start: float, end: float, w: float) -> "DistributedLoad":
        return cls(start, end, w, w)

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def total(self) -> float:
        return 0.5 * (self.start_magnitude + self.end_magnitude) * self.length

    def intensity(self, x: float) -> float:
        """Load intensity at global position x (inside the load extent)."""
        slope = (self.end_magnitude - self.start_magnitude) / self.length
        return self.start_magnitude + slope * (x - self.start)


@dataclass(frozen=True)
class BeamInput:
    """
    Everything needed to analyse and design one beam.

    Geometry along the span is in metres, the cross-section in centimetres,
    bar diameters in millimetres, strengths in MPa, loads in kN and kN/m.
    """
    span: float
    supports: Tuple[Support, ...]
    width: float                                 # cm
    height: float                                # cm
    fck: float = 25.0                            # MPa
    point_loads: Tuple[PointLoad, ...] = ()
    distributed_loads: Tuple[DistributedLoad, ...] = ()
    steel: SteelGrade = SteelGrade.CA50
    cover: float = 2.5                           # cm
    bar_diameter: float = 10.0                   # mm, bottom face
    top_bar_diameter: Optional[float] = None     # mm, defaults to bar_diameter
    stirrup_diameter: float = 5.0                # mm
    stirrup_spacing: float = 15.0                # cm
    stirrup_hook_angle: int = 90
    stirrup_steel: SteelGrade = SteelGrade.CA50
    layers: int = 1
    load_factor: float = GAMMA_F

    def __post_init__(self):
        # Accept lists from callers but keep the record hashable and immutable
        for name in ("supports", "point_loads", "distributed_loads"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def top_diameter(self) -> float:
        return self.bar_diameter if self.top_bar_diameter is None else self.top_bar_diameter

    @property
    def is_cantilever(self) -> bool:
        """One support location, clamped."""
        distinct = merge_positions(s.position for s in self.supports)
        return len(distinct) == 1 and any(s.type == SupportType.FIXED for s in self.supports)

    def validate(self) -> None:
        """Raise InputError for inputs that have no recoverable interpretation."""
        if not self.span > 0:
            raise InputError(f"Span must be positive, got {self.span}.")
        if self.width <= 0 or self.height <= 0:
            raise InputError(f"Section {self.width}x{self.height} cm must have positive dimensions.")
        if self.fck <= 0:
            raise InputError(f"fck must be positive, got {self.fck}.")
        if self.cover < 0 or self.bar_diameter <= 0 or self.stirrup_diameter <= 0:
            raise InputError("Cover and bar diameters must be positive.")
        if self.top_bar_diameter is not None and self.top_bar_diameter <= 0:
            raise InputError(f"Top bar diameter must be positive, got {self.top_bar_diameter}.")

        # checks.column imports this module, so the formula is pulled in lazily
        from .checks.flexure import effective_depth
        for face, dia in (("bottom", self.bar_diameter), ("top", self.top_diameter)):
            d = effective_depth(self.height, self.cover, self.stirrup_diameter, dia)
            if d <= 0:
                raise InputError(
                    f"Effective depth of the {face} face is {d:.2f} cm: "
                    f"the {self.height:g} cm section cannot hold the cover, stirrup and bars."
                )

        if self.stirrup_spacing <= 0:
            raise InputError(f"Stirrup spacing must be positive, got {self.stirrup_spacing}.")
        if self.layers not in (1, 2, 3):
            raise InputError(f"Allowed layers must be 1, 2 or 3, got {self.layers}.")
        if self.load_factor <= 0:
            raise InputError(f"Load factor must be positive, got {self.load_factor}.")

        for s in self.supports:
            self._check_position(s.position, "Support")
        for p in self.point_loads:
            self._check_position(p.position, "Point load")
        for d in self.distributed_loads:
            if not d.start < d.end:
                raise InputError(
                    f"Distributed load extent [{d.start}, {d.end}] must have start < end."
                )
            self._check_position(d.start, "Distributed load start")
            self._check_position(d.end, "Distributed load end")

    def _check_position(self, x: float, what: str) -> None:
        if x < -TOLERANCE or x > self.span + TOLERANCE:
            raise InputError(f"{what} at x={x} m lies outside the span [0, {self.span}].")


@dataclass(frozen=True)
class ColumnInput:
    height: float                                # m
    axial_load: float                            # kN (characteristic)
    width_x: float                               # cm
    width_y: float                               # cm
    fck: float = 25.0
    steel: SteelGrade = SteelGrade.CA50
    buckling: BucklingCase = BucklingCase.PINNED_PINNED
    bar_diameter: float = 10.0                   # mm
    stirrup_diameter: float = 5.0                # mm
    stirrup_spacing: float = 15.0                # cm
    load_factor: float = GAMMA_F

    def validate(self) -> None:
        if not self.height > 0:
            raise InputError(f"Column height must be positive, got {self.height}.")
        if self.width_x <= 0 or self.width_y <= 0:
            raise InputError(f"Section {self.width_x}x{self.width_y} cm must have positive dimensions.")
        if self.axial_load <= 0:
            raise InputError(f"Axial load must be a positive compression, got {self.axial_load}.")
        if self.fck <= 0 or self.bar_diameter <= 0 or self.stirrup_diameter <= 0:
            raise InputError("fck and bar diameters must be positive.")
        if self.stirrup_spacing <= 0 or self.load_factor <= 0:
            raise InputError("Stirrup spacing and load factor must be positive.")


@dataclass(frozen=True)
class Node:
    id: int
    x: float


@dataclass(frozen=True)
class BeamModel:
    """
    Derived FEM model: ordered nodes, flexural stiffness and the loads.

    Built fresh per request by assembly.build_beam_model.
    """
    span: float
    nodes: Tuple[Node, ...]
    E: float        # kN/m²
    I: float        # m⁴
    supports: Tuple[Support, ...]
    point_loads: Tuple[PointLoad, ...] = ()
    distributed_loads: Tuple[DistributedLoad, ...] = ()

    @property
    def EI(self) -> float:
        return self.E * self.I

    @property
    def n_elements(self) -> int:
        return len(self.nodes) - 1

    def element_span(self, i: int) -> Tuple[float, float]:
        return self.nodes[i].x, self.nodes[i + 1].x

    def node_at(self, x: float) -> Optional[int]:
        """Index of the node at position x (within TOLERANCE), or None."""
        for node in self.nodes:
            if math.isclose(node.x, x, rel_tol=0.0, abs_tol=TOLERANCE):
                return node.id
        return None
