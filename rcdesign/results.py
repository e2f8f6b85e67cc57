# Output records shared by the beam and column design engines

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import pandas as pd


class FindingKind(str, Enum):
    STRUCTURAL_INSTABILITY = "structural_instability"
    SECTION_INSUFFICIENT = "section_insufficient"
    DETAILING_INFEASIBLE = "detailing_infeasible"
    SERVICEABILITY_EXCEEDED = "serviceability_exceeded"
    WARNING = "warning"


# Kinds that never flip the validity flag
NON_BLOCKING = {FindingKind.SERVICEABILITY_EXCEEDED, FindingKind.WARNING}


@dataclass(frozen=True)
class Finding:
    kind: FindingKind
    message: str

    @property
    def blocking(self) -> bool:
        return self.kind not in NON_BLOCKING


@dataclass(frozen=True)
class Metric:
    label: str
    value: float
    unit: str
    description: str = ""


@dataclass(frozen=True)
class ReinforcementOption:
    diameter: float     # mm
    count: int
    area: float         # cm²
    layers: int
    valid: bool = True


@dataclass(frozen=True)
class CrossSectionLayout:
    """Read-only section description for drawing and reporting."""
    width: float                    # cm
    height: float                   # cm
    cover: float                    # cm
    stirrup_diameter: float         # mm
    stirrup_spacing: float          # cm
    stirrup_hook_angle: int
    bottom_bar_diameter: float      # mm
    top_bar_diameter: float         # mm
    bottom_layers: Tuple[int, ...]  # from the face inwards
    top_layers: Tuple[int, ...]
    left_layers: Tuple[int, ...] = ()
    right_layers: Tuple[int, ...] = ()
    stirrup_legs: int = 2


class CalculationMemory:
    """
    Ordered, human-readable transcript of a calculation.

    Sections are numbered by the caller so the numbering stays fixed no
    matter which branches ran.
    """

    def __init__(self):
        self._lines: List[str] = []

    def section(self, title: str) -> None:
        if self._lines:
            self._lines.append("")
        self._lines.append(f"**{title}**")

    def line(self, text: str) -> None:
        self._lines.append(f"   {text}")

    def detail(self, text: str) -> None:
        self._lines.append(f"     {text}")

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)


@dataclass
class CalculationResult:
    """
    Outcome of one design call.

    Expected non-conformance (insufficient section, bars that do not fit,
    excessive deflection) is reported through findings, never raised.
    """
    findings: List[Finding] = field(default_factory=list)
    calculation_memory: Tuple[str, ...] = ()
    metrics: List[Metric] = field(default_factory=list)
    diagrams: Dict[str, List[Tuple[float, float]]] = field(default_factory=dict)
    cross_section: Optional[CrossSectionLayout] = None
    alternatives: List[ReinforcementOption] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(f.blocking for f in self.findings)

    @property
    def messages(self) -> List[str]:
        return [f.message for f in self.findings]

    def has(self, kind: FindingKind) -> bool:
        return any(f.kind == kind for f in self.findings)

    def metric(self, label: str) -> Metric:
        for m in self.metrics:
            if m.label == label:
                return m
        raise KeyError(label)

    def alternatives_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(o) for o in self.alternatives],
            columns=['diameter', 'count', 'area', 'layers', 'valid'],
        )

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['is_valid'] = self.is_valid
        data['messages'] = self.messages
        return data
