# rcdesign/design.py
"""
BEAM AND COLUMN DESIGN
======================

Entry points that turn an input record into a CalculationResult.

design_beam:
    solve_beam (FEM + diagrams) → flexure per face → minimum stirrups →
    deflection limit → alternatives, metrics, layout and calculation memory.

design_column:
    slenderness gate → minimum and second-order moments → empirical ω →
    steel bounds → bar packing → tie warnings → column diagrams.

Expected non-conformance never raises; it is collected as findings. Only
InputError escapes to the caller.
"""

import logging
from typing import List

from .checks.column import (
    axial_ratio,
    axis_moments,
    buckled_profile,
    mechanical_ratio,
    pack_column_bars,
    required_steel,
    slenderness,
    stirrup_warnings,
)
from .checks.flexure import FaceDesign, design_face, estimated_steel, reinforcement_alternatives
from .checks.shear import deflection_check, minimum_stirrup_check
from .config import CONFIG, GAMMA_C, GAMMA_S, N_SAMPLES, EngineConfig
from .kernel.solve import StructuralInstability
from .materials import fcd, fyd, mpa_to_kn_cm2, mpa_to_kn_m2
from .model import BeamInput, ColumnInput
from .results import (
    CalculationMemory,
    CalculationResult,
    CrossSectionLayout,
    Finding,
    FindingKind,
    Metric,
)
from .solve import solve_beam

logger = logging.getLogger(__name__)


FACE_TITLES = {'bottom': 'BOTTOM / POSITIVE MOMENT', 'top': 'TOP / NEGATIVE MOMENT'}


def _write_face(memory: CalculationMemory, face: FaceDesign, width: float, height: float,
                fcd_c: float, fyd_c: float, config: EngineConfig) -> None:
    md_kncm = face.md * 100.0
    memory.section(f"3 - FLEXURAL DESIGN ({FACE_TITLES[face.face]})")
    memory.line(f"Design moment (Md): {face.md:.2f} kN.m = {md_kncm:.0f} kN.cm")
    memory.line(f"Effective depth (d): {face.d:.2f} cm")
    memory.line("Moment coefficient:")
    memory.detail("Kmd = Md / (bw * d² * fcd)")
    memory.detail(f"Kmd = {md_kncm:.0f} / ({width:g} * {face.d:.2f}² * {fcd_c:.4f})")
    memory.detail(f"Kmd = {face.kmd:.4f}")

    if not face.sufficient:
        memory.detail(f"ALERT: Kmd ({face.kmd:.4f}) > {config.kmd_limit}. Brittle failure domain, enlarge the section.")
    else:
        memory.line("Neutral axis depth ratio:")
        memory.detail("βx = 1.25 * (1 - √(1 - 2 * Kmd))")
        memory.detail(f"βx = {face.beta_x:.4f}  (x = {face.beta_x * face.d:.2f} cm)")
        memory.line("Lever arm ratio:")
        memory.detail("βz = 1 - 0.4 * βx")
        memory.detail(f"βz = {face.beta_z:.4f}  (z = {face.beta_z * face.d:.2f} cm)")
        memory.line("Steel area:")
        memory.detail("As = Md / (βz * d * fyd)")
        memory.detail(f"As = {md_kncm:.0f} / ({face.beta_z:.4f} * {face.d:.2f} * {fyd_c:.4f})")
        memory.detail(f"As,calc = {face.as_calc:.2f} cm²")

    memory.line("Minimum reinforcement:")
    memory.detail(f"ρmin = {face.rho_min:.3f}%")
    memory.detail(f"As,min = {face.rho_min / 100.0:g} * {width:g} * {height:g} = {face.as_min:.2f} cm²")

    if face.constructive:
        memory.line("Negligible moment: constructive (minimum) reinforcement adopted.")
    elif face.as_calc is not None and face.as_calc < face.as_min:
        memory.line(f"As,calc < As,min. Adopted As = {face.as_required:.2f} cm²")
    elif face.as_calc is not None:
        memory.line(f"As,calc ≥ As,min. Adopted As = {face.as_required:.2f} cm²")

    layers = " + ".join(str(n) for n in face.layers)
    memory.line(
        f"Chosen detailing: {face.count} bars ø{face.bar_diameter:g} mm "
        f"(As,ef = {face.as_provided:.2f} cm²) in layers [{layers}], "
        f"max {face.max_bars_per_layer} per layer"
    )


def _face_findings(face: FaceDesign, allowed_layers: int, config: EngineConfig) -> List[Finding]:
    findings = []
    label = 'positive' if face.face == 'bottom' else 'negative'
    if not face.sufficient:
        findings.append(Finding(
            FindingKind.SECTION_INSUFFICIENT,
            f"Section insufficient for the {label} moment (Kmd = {face.kmd:.4f} > {config.kmd_limit}).",
        ))
    if not face.fits:
        findings.append(Finding(
            FindingKind.DETAILING_INFEASIBLE,
            f"Error: {face.count} bars ø{face.bar_diameter:g} on the {face.face} face "
            f"do not fit in {allowed_layers} layer(s).",
        ))
    return findings


def design_beam(
    beam: BeamInput,
    config: EngineConfig = CONFIG,
    n_samples: int = N_SAMPLES,
) -> CalculationResult:
    """
    Analyse and design a reinforced concrete beam.

    Args:
        beam: Input record (validated here; InputError propagates)
        config: Limits and detailing constants
        n_samples: Diagram sub-intervals

    Returns:
        CalculationResult. An unstable support layout gives an invalid
        result with no diagrams.
    """
    memory = CalculationMemory()

    try:
        analysis = solve_beam(beam, n_samples)
    except StructuralInstability as exc:
        logger.warning("Beam rejected: %s", exc)
        memory.section("STRUCTURAL INSTABILITY")
        memory.line(str(exc))
        return CalculationResult(
            findings=[Finding(FindingKind.STRUCTURAL_INSTABILITY, str(exc))],
            calculation_memory=memory.lines,
        )

    diagrams = analysis.diagrams
    gf = beam.load_factor
    fyk = beam.steel.fyk
    fcd_c = mpa_to_kn_cm2(fcd(beam.fck))
    fyd_c = mpa_to_kn_cm2(fyd(fyk))

    md_pos = max(0.0, diagrams.max_moment_pos) * gf
    md_neg = abs(min(0.0, diagrams.max_moment_neg)) * gf

    bottom = design_face(md_pos, 'bottom', beam.bar_diameter, beam.width, beam.height, beam.cover,
                         beam.stirrup_diameter, beam.fck, fyk, beam.layers, config)
    top = design_face(md_neg, 'top', beam.top_diameter, beam.width, beam.height, beam.cover,
                      beam.stirrup_diameter, beam.fck, fyk, beam.layers, config)

    # 1 - dimensions
    memory.section("1 - CHOSEN DIMENSIONS")
    memory.line(f"Width (bw): {beam.width:.1f} cm")
    memory.line(f"Height (h): {beam.height:.1f} cm")
    memory.line(f"Cover (c): {beam.cover:.1f} cm")
    memory.line(f"Stirrup: ø{beam.stirrup_diameter:.1f} mm")
    memory.line(f"Longitudinal bar: ø{beam.bar_diameter:.1f} mm")
    memory.line("Effective depth (d): h - c - øt - øl/2")
    memory.line(
        f"d = {beam.height:g} - {beam.cover:g} - {beam.stirrup_diameter / 10.0:g} - "
        f"{beam.bar_diameter / 20.0:.2f} = {bottom.d:.2f} cm"
    )

    # 2 - coefficients
    memory.section("2 - ADOPTED COEFFICIENTS")
    memory.line(f"γc (concrete) = {GAMMA_C}")
    memory.line(f"γs (steel) = {GAMMA_S}")
    memory.line(f"γf (actions) = {gf}")
    memory.line(f"αc = {config.alpha_c:.2f}")
    memory.line(f"λ (stress block depth) = {config.block_depth_factor:.2f}")
    memory.line("fcd = fck / γc")
    memory.line(f"fcd = {beam.fck:g} / {GAMMA_C} = {fcd(beam.fck):.2f} MPa = {fcd_c:.4f} kN/cm²")
    memory.line("fyd = fyk / γs")
    memory.line(f"fyd = {fyk:g} / {GAMMA_S} = {fyd(fyk):.2f} MPa = {fyd_c:.4f} kN/cm²")

    # 3 - flexure
    findings: List[Finding] = []
    for face in (bottom, top):
        _write_face(memory, face, beam.width, beam.height, fcd_c, fyd_c, config)
        findings.extend(_face_findings(face, beam.layers, config))

    # 4 - shear and serviceability
    stirrups = minimum_stirrup_check(
        diagrams.max_shear, gf, beam.fck, beam.stirrup_steel.fyk,
        beam.stirrup_diameter, beam.stirrup_spacing, beam.width,
    )
    deflection = deflection_check(diagrams.max_deflection, beam.span, beam.is_cantilever, config)

    memory.section("4 - SHEAR AND SERVICEABILITY")
    memory.line("Shear:")
    memory.detail(f"Vd = Vk * γf = {diagrams.max_shear:.2f} * {gf} = {stirrups.vd:.2f} kN")
    memory.line("Minimum transverse reinforcement:")
    memory.detail(f"fctm = 0.3 * {beam.fck:g}^(2/3) = {stirrups.fctm:.2f} MPa")
    memory.detail(f"ρsw,min = 0.2 * (fctm / fywk) = {stirrups.rho_sw_min * 100:.3f}%")
    memory.line("Provided transverse reinforcement:")
    memory.detail(f"Stirrups: ø{beam.stirrup_diameter:g} mm ({stirrups.legs} legs) every {beam.stirrup_spacing:g} cm")
    memory.detail(f"Asw = {stirrups.asw:.3f} cm²")
    memory.detail(
        f"ρsw = Asw / (s * bw) = {stirrups.asw:.3f} / ({beam.stirrup_spacing:g} * {beam.width:g}) "
        f"= {stirrups.rho_sw * 100:.3f}%"
    )
    if stirrups.passes:
        memory.detail("SHEAR STATUS: OK (minimum reinforcement met).")
    else:
        memory.detail("SHEAR STATUS: FAILED (ρsw < ρsw,min).")
        findings.append(Finding(
            FindingKind.DETAILING_INFEASIBLE,
            "Error: insufficient stirrup ratio. Increase the diameter or reduce the spacing.",
        ))

    memory.line("Deflection (serviceability):")
    memory.detail(f"Immediate elastic deflection: {deflection.deflection:.3f} cm")
    memory.detail(f"Limit (L/{deflection.divisor:g}): {deflection.limit:.2f} cm")
    if deflection.passes:
        memory.detail("SERVICEABILITY STATUS: OK.")
    else:
        memory.detail("SERVICEABILITY STATUS: NOT COMPLIANT, excessive deflection.")
        findings.append(Finding(
            FindingKind.SERVICEABILITY_EXCEEDED,
            f"Serviceability warning: deflection {deflection.deflection:.2f} cm exceeds "
            f"L/{deflection.divisor:g} ({deflection.limit:.2f} cm).",
        ))

    # a face past the Kmd limit has no As, so size from the moment instead of As,min
    target = max(
        face.as_required if face.sufficient
        else max(face.as_min, estimated_steel(face.md, beam.height, fyd_c))
        for face in (bottom, top)
    )
    alternatives = reinforcement_alternatives(
        target, beam.width, beam.cover, beam.stirrup_diameter, config=config,
    )

    metrics = [
        Metric("Md+", md_pos, "kN.m", "Design sagging moment"),
        Metric("Md-", md_neg, "kN.m", "Design hogging moment"),
        Metric("Vd", stirrups.vd, "kN", "Design shear"),
        Metric("Deflection", deflection.deflection, "cm", f"Limit {deflection.limit:.2f} cm"),
        Metric("As bottom", bottom.as_provided, "cm²", f"{bottom.count} ø{bottom.bar_diameter:g}mm"),
        Metric("As top", top.as_provided, "cm²", f"{top.count} ø{top.bar_diameter:g}mm"),
    ]

    layout = CrossSectionLayout(
        width=beam.width,
        height=beam.height,
        cover=beam.cover,
        stirrup_diameter=beam.stirrup_diameter,
        stirrup_spacing=beam.stirrup_spacing,
        stirrup_hook_angle=beam.stirrup_hook_angle,
        bottom_bar_diameter=bottom.bar_diameter,
        top_bar_diameter=top.bar_diameter,
        bottom_layers=bottom.layers,
        top_layers=top.layers,
        stirrup_legs=stirrups.legs,
    )

    result = CalculationResult(
        findings=findings,
        calculation_memory=memory.lines,
        metrics=metrics,
        diagrams={
            'shear': diagrams.shear_series(),
            'moment': diagrams.moment_series(),
            'deflection': diagrams.deflection_series(),
        },
        cross_section=layout,
        alternatives=alternatives,
    )

    if result.is_valid:
        logger.info("Beam L=%.2f m designed: Md+=%.2f Md-=%.2f Vd=%.2f", beam.span, md_pos, md_neg, stirrups.vd)
    else:
        logger.warning("Beam L=%.2f m is not valid: %s", beam.span, "; ".join(result.messages))
    return result


def design_column(column: ColumnInput, config: EngineConfig = CONFIG) -> CalculationResult:
    """
    Design a rectangular column for centred axial load plus minimum moments.

    Args:
        column: Input record (InputError propagates)
        config: Limits and detailing constants

    Returns:
        CalculationResult with normal, moment and buckling diagrams.
        Slenderness above the limit stops early with memory and message only.
    """
    column.validate()

    nd = column.axial_load * column.load_factor
    fcd_m = mpa_to_kn_m2(fcd(column.fck))
    fyd_m = mpa_to_kn_m2(fyd(column.steel.fyk))

    hx = column.width_x / 100.0
    hy = column.width_y / 100.0
    ac = hx * hy
    k = column.buckling.k
    le = k * column.height

    memory = CalculationMemory()
    memory.section("1. INPUT DATA AND MATERIALS")
    memory.line(f"Axial load (Nk): {column.axial_load:g} kN")
    memory.line(f"Design load (Nd): {nd:.2f} kN")
    memory.line(f"Section: {column.width_x:g}x{column.width_y:g} cm")
    memory.line(f"Concrete C{column.fck:g}, steel {column.steel.value}")
    memory.line(f"Height: {column.height:g} m, end restraint: {column.buckling.value} (k={k:g})")

    lam_x = slenderness(k, column.height, hx)
    lam_y = slenderness(k, column.height, hy)
    memory.section("2. SLENDERNESS")
    memory.line(f"Buckling length (le): {le:.2f} m")
    memory.line(f"λx = {lam_x:.2f}")
    memory.line(f"λy = {lam_y:.2f}")

    max_lambda = max(lam_x, lam_y)
    if max_lambda > config.max_slenderness:
        message = f"Excessive slenderness (λ={max_lambda:.1f} > {config.max_slenderness:g}). Enlarge the section."
        logger.warning("Column rejected: %s", message)
        return CalculationResult(
            findings=[Finding(FindingKind.SECTION_INSUFFICIENT, message)],
            calculation_memory=memory.lines,
        )

    nu = axial_ratio(nd, ac, fcd_m)
    mx = axis_moments(nd, hx, lam_x, le, nu, config)
    my = axis_moments(nd, hy, lam_y, le, nu, config)

    memory.section("3. MINIMUM MOMENTS (FIRST ORDER)")
    memory.line(f"e_min,x = {mx.e_min * 100:.2f} cm => M1d,min,x = {mx.m1_min:.2f} kN.m")
    memory.line(f"e_min,y = {my.e_min * 100:.2f} cm => M1d,min,y = {my.m1_min:.2f} kN.m")
    for axis, am in (('x', mx), ('y', my)):
        if am.second_order:
            memory.line(
                f"λ{axis} > {config.second_order_slenderness:g}: second-order effects considered "
                f"-> M_tot,{axis} = {am.m_total:.2f} kN.m"
            )

    mu_x = mx.m_total / (hy * hx ** 2 * fcd_m)
    mu_y = my.m_total / (hx * hy ** 2 * fcd_m)
    omega = max(mechanical_ratio(nu, mu_x), mechanical_ratio(nu, mu_y))
    as_calc, as_min, as_final, as_max = required_steel(omega, nd, ac, fcd_m, fyd_m, config)

    memory.section("4. REINFORCEMENT DESIGN")
    memory.line(f"Reduced axial force (ν): {nu:.3f}")
    memory.line(f"Reduced moment X (μx): {mu_x:.3f}")
    memory.line(f"Reduced moment Y (μy): {mu_y:.3f}")
    memory.line(f"ω (empirical fit) = {omega:.3f}")
    memory.line(f"As,calc (estimated): {as_calc:.2f} cm²")
    memory.line(f"As,min: {as_min:.2f} cm²")

    findings: List[Finding] = []
    if nu > 1.0:
        findings.append(Finding(
            FindingKind.SECTION_INSUFFICIENT,
            "Concrete section insufficient (crushing). Enlarge the section or raise fck.",
        ))
    if as_final > as_max:
        findings.append(Finding(
            FindingKind.SECTION_INSUFFICIENT,
            f"Required steel ({as_final:.2f} cm²) exceeds the maximum of "
            f"{config.max_column_steel_ratio * 100:g}% of the section ({as_max:.2f} cm²).",
        ))

    bars = pack_column_bars(as_final, column.bar_diameter, column.width_x, column.width_y)
    warnings = stirrup_warnings(
        column.stirrup_diameter, column.stirrup_spacing, column.bar_diameter,
        column.width_x, column.width_y, config,
    )
    findings.extend(Finding(FindingKind.WARNING, w) for w in warnings)

    memory.section("5. DETAILING")
    memory.line(f"Adopted: {bars.count} bars ø{column.bar_diameter:g} mm")
    memory.line(
        f"Distribution: 4 corners + {bars.side_bars_x * 2} on the X faces "
        f"+ {bars.side_bars_y * 2} on the Y faces"
    )
    memory.line(f"As,ef: {bars.area:.2f} cm²")
    status = warnings[-1] if warnings else "checked OK"
    memory.line(f"Stirrups: ø{column.stirrup_diameter:g} every {column.stirrup_spacing:g} cm - {status}")

    m_design = max(mx.m_total, my.m_total)
    ratio = bars.area / (column.width_x * column.width_y) * 100.0

    metrics = [
        Metric("Nd", nd, "kN", "Design axial load"),
        Metric("M_total,x", mx.m_total, "kN.m"),
        Metric("M_total,y", my.m_total, "kN.m"),
        Metric("As longitudinal", bars.area, "cm²", f"{bars.count} ø{column.bar_diameter:g}mm"),
        Metric("Steel ratio", ratio, "%"),
    ]

    layout = CrossSectionLayout(
        width=column.width_x,
        height=column.width_y,
        cover=config.column_cover,
        stirrup_diameter=column.stirrup_diameter,
        stirrup_spacing=column.stirrup_spacing,
        stirrup_hook_angle=90,
        bottom_bar_diameter=column.bar_diameter,
        top_bar_diameter=column.bar_diameter,
        bottom_layers=(bars.row_bars,),
        top_layers=(bars.row_bars,),
        left_layers=(bars.side_bars_y,),
        right_layers=(bars.side_bars_y,),
    )

    result = CalculationResult(
        findings=findings,
        calculation_memory=memory.lines,
        metrics=metrics,
        diagrams={
            'normal': [(0.0, nd), (column.height, nd)],
            'moment': [
                (0.0, m_design),
                (column.height / 2.0, 0.6 * m_design),
                (column.height, m_design),
            ],
            'buckling': buckled_profile(column.buckling, column.height, m_design / nd),
        },
        cross_section=layout,
    )

    if result.is_valid:
        logger.info("Column %gx%g designed: Nd=%.2f, %d bars ø%g",
                    column.width_x, column.width_y, nd, bars.count, column.bar_diameter)
    else:
        logger.warning("Column %gx%g is not valid: %s",
                       column.width_x, column.width_y, "; ".join(result.messages))
    return result

