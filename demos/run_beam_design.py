# File: demos/run_beam_design.py
"""
DEMO: REINFORCED CONCRETE BEAM DESIGN
=====================================

PURPOSE:
--------
Runs the whole beam pipeline on a simply supported beam with a uniform load
and an optional point load:

1. FEM solve (stiffness, penalty supports, Gaussian elimination)
2. Shear / moment / deflection diagrams by walking the span
3. Flexural design of both faces, minimum stirrups, deflection limit
4. Calculation memory, metrics and alternative bar arrangements

EXAMPLE USAGE:
--------------
    python demos/run_beam_design.py --span 5 --w 15
    python demos/run_beam_design.py --span 6 --w 20 --P 30 --width 20 --height 60 --csv artifacts/beam.csv

CHECK BY HAND:
--------------
For a UDL only, M_max = w·L²/8 and V_max = w·L/2 (characteristic values).
"""

import argparse
import logging
import os

from rcdesign.config import BAR_DIAMETERS, STIRRUP_DIAMETERS
from rcdesign.design import design_beam
from rcdesign.model import BeamInput, DistributedLoad, PointLoad, SteelGrade, Support, SupportType
from rcdesign.solve import solve_beam


def main():
    parser = argparse.ArgumentParser(
        description='Analyse and design a simply supported RC beam',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demos/run_beam_design.py --span 5 --w 15
  python demos/run_beam_design.py --span 6 --w 20 --P 30 --csv artifacts/beam.csv
        """
    )
    parser.add_argument('--span', type=float, default=5.0, help='Span (m, default: 5.0)')
    parser.add_argument('--w', type=float, default=15.0, help='Uniform load (kN/m, default: 15.0)')
    parser.add_argument('--P', type=float, default=0.0, help='Point load at midspan (kN, default: 0)')
    parser.add_argument('--width', type=float, default=20.0, help='Section width (cm, default: 20)')
    parser.add_argument('--height', type=float, default=50.0, help='Section height (cm, default: 50)')
    parser.add_argument('--fck', type=float, default=25.0, help='Concrete strength (MPa, default: 25)')
    parser.add_argument('--bar', type=float, default=12.5, choices=BAR_DIAMETERS,
                        help='Longitudinal bar diameter (mm, default: 12.5)')
    parser.add_argument('--stirrup', type=float, default=5.0, choices=STIRRUP_DIAMETERS,
                        help='Stirrup diameter (mm, default: 5.0)')
    parser.add_argument('--layers', type=int, default=1, choices=(1, 2, 3),
                        help='Allowed layers per face (default: 1)')
    parser.add_argument('--csv', type=str, default=None,
                        help='Write the diagrams to this CSV file')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    point_loads = [PointLoad(args.span / 2, args.P)] if args.P > 0 else []
    beam = BeamInput(
        span=args.span,
        supports=[Support(0.0, SupportType.PIN), Support(args.span, SupportType.ROLLER)],
        point_loads=point_loads,
        distributed_loads=[DistributedLoad.uniform(0.0, args.span, args.w)],
        width=args.width,
        height=args.height,
        fck=args.fck,
        steel=SteelGrade.CA50,
        bar_diameter=args.bar,
        stirrup_diameter=args.stirrup,
        layers=args.layers,
    )

    print("=" * 70)
    print("RC BEAM DESIGN")
    print("=" * 70)
    print(f"Span: {beam.span:.2f} m   Section: {beam.width:g}x{beam.height:g} cm   C{beam.fck:g}")
    print(f"UDL: {args.w:.2f} kN/m   Midspan load: {args.P:.2f} kN")
    print()

    # ========================================================================
    # STEP 1: ANALYSIS
    # ========================================================================
    analysis = solve_beam(beam)
    diagrams = analysis.diagrams

    print("STEP 1: Analysis")
    print("-" * 70)
    for r in analysis.reactions.values():
        print(f"  Reaction at x={r.position:.2f} m: Fy={r.Fy:.2f} kN, Mz={r.Mz:.2f} kN·m")
    print(f"  M+ max: {diagrams.max_moment_pos:.2f} kN·m at x={diagrams.x_moment_pos:.2f} m")
    print(f"  M- max: {diagrams.max_moment_neg:.2f} kN·m at x={diagrams.x_moment_neg:.2f} m")
    print(f"  |V| max: {diagrams.max_shear:.2f} kN at x={diagrams.x_shear:.2f} m")
    print(f"  Deflection: {diagrams.max_deflection * 100:.3f} cm at x={diagrams.x_deflection:.2f} m")
    if args.P == 0:
        print(f"  (hand check: wL²/8 = {args.w * args.span**2 / 8:.2f}, wL/2 = {args.w * args.span / 2:.2f})")
    print()

    # ========================================================================
    # STEP 2: DESIGN
    # ========================================================================
    result = design_beam(beam)

    print("STEP 2: Design")
    print("-" * 70)
    print(f"  Valid: {result.is_valid}")
    for m in result.messages:
        print(f"  ! {m}")
    for metric in result.metrics:
        print(f"  {metric.label:<12} {metric.value:>10.2f} {metric.unit:<6} {metric.description}")
    print()

    print("Calculation memory")
    print("-" * 70)
    for line in result.calculation_memory:
        print(line)
    print()

    print("Alternative arrangements")
    print("-" * 70)
    print(result.alternatives_dataframe().to_string(index=False))

    if args.csv:
        directory = os.path.dirname(args.csv)
        if directory:
            os.makedirs(directory, exist_ok=True)
        diagrams.to_dataframe().to_csv(args.csv, index=False)
        print()
        print(f"Diagrams saved to: {args.csv}")


if __name__ == "__main__":
    main()
