# File: demos/run_column_design.py
"""
DEMO: REINFORCED CONCRETE COLUMN DESIGN
=======================================

Centred axial load on a rectangular column: slenderness, minimum and
second-order moments, the empirical ω estimate and the bar layout.

EXAMPLE USAGE:
--------------
    python demos/run_column_design.py --N 800 --wx 25 --wy 40 --height 3.0
    python demos/run_column_design.py --N 500 --case fixed-free --csv artifacts/column.csv
"""

import argparse
import logging
import os

import pandas as pd

from rcdesign.design import design_column
from rcdesign.model import BucklingCase, ColumnInput, SteelGrade


def main():
    parser = argparse.ArgumentParser(
        description='Design a rectangular RC column under axial load',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--N', type=float, default=800.0, help='Characteristic axial load (kN, default: 800)')
    parser.add_argument('--height', type=float, default=3.0, help='Column height (m, default: 3.0)')
    parser.add_argument('--wx', type=float, default=25.0, help='Side along X (cm, default: 25)')
    parser.add_argument('--wy', type=float, default=40.0, help='Side along Y (cm, default: 40)')
    parser.add_argument('--fck', type=float, default=25.0, help='Concrete strength (MPa, default: 25)')
    parser.add_argument('--bar', type=float, default=12.5, help='Longitudinal bar (mm, default: 12.5)')
    parser.add_argument('--case', type=str, default=BucklingCase.PINNED_PINNED.value,
                        choices=[c.value for c in BucklingCase],
                        help='End restraint (default: pinned-pinned)')
    parser.add_argument('--csv', type=str, default=None,
                        help='Write the buckled shape to this CSV file')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    column = ColumnInput(
        height=args.height,
        axial_load=args.N,
        width_x=args.wx,
        width_y=args.wy,
        fck=args.fck,
        steel=SteelGrade.CA50,
        buckling=BucklingCase(args.case),
        bar_diameter=args.bar,
        stirrup_spacing=15.0,
    )
    result = design_column(column)

    print("=" * 70)
    print("RC COLUMN DESIGN")
    print("=" * 70)
    print(f"Valid: {result.is_valid}")
    for m in result.messages:
        print(f"  ! {m}")
    print()

    for line in result.calculation_memory:
        print(line)
    print()

    if result.metrics:
        table = pd.DataFrame(
            [(m.label, round(m.value, 2), m.unit, m.description) for m in result.metrics],
            columns=['metric', 'value', 'unit', 'note'],
        )
        print(table.to_string(index=False))

    if args.csv and 'buckling' in result.diagrams:
        directory = os.path.dirname(args.csv)
        if directory:
            os.makedirs(directory, exist_ok=True)
        shape = pd.DataFrame(result.diagrams['buckling'], columns=['z', 'deflection_cm'])
        shape.to_csv(args.csv, index=False)
        print()
        print(f"Buckled shape saved to: {args.csv}")


if __name__ == "__main__":
    main()
