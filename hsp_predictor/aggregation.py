"""
Aggregation of group contributions into Hansen solubility parameters.

Every function returns an ``HSPResult`` built through ``HSPResult.build``,
or None when the method cannot be applied to the input.
"""

from __future__ import annotations
from typing import Optional
import math

from .fragmentation.core import FragmentAssignment
from .logging_utils import get_logger
from .models import HSPMethod, HSPResult

logger = get_logger("aggregation")

REFERENCE_TEMPERATURE = 298.15  # K
EXPANSIVITY = 7.0e-4            # 1/K, linear correction for the EoS method

# Marcus-style ionic heuristic
IONIC_REFERENCE_WEIGHT = 150.0  # g/mol
IONIC_RATIO_CAP = 1.5
IONIC_DENSITY = 1.2             # g/cm³, typical for salts and ionic liquids


def _normalising_volume(total_volume: float, molecular_weight: float, volume_epsilon: float) -> Optional[float]:
    """Fragment volume, or the molecular weight when the sum is degenerate."""
    if total_volume > volume_epsilon:
        return total_volume
    if molecular_weight and molecular_weight > 0:
        logger.debug("Fragment volume %.3f is degenerate, normalising by molecular weight %.2f",
                     total_volume, molecular_weight)
        return float(molecular_weight)
    return None


def van_krevelen(
    fragments: Optional[FragmentAssignment],
    molecular_weight: float,
    volume_epsilon: float = 1e-6,
    digits: Optional[int] = 2,
) -> Optional[HSPResult]:
    """
    Van Krevelen & Hoftyzer group contribution.

        δD = ΣFd / V,   δP = sqrt(ΣFp²) / V,   δH = sqrt(ΣEh / V)

    Args:
        fragments: Output of the greedy fragmenter
        molecular_weight: Fallback normalising volume
        volume_epsilon: Smallest fragment volume treated as meaningful
        digits: Rounding of the three components

    Returns:
        HSPResult tagged VAN_KREVELEN, or None without fragments
    """
    if not fragments:
        return None

    sum_fd = sum_fp2 = sum_eh = sum_v = 0.0
    for group, count in fragments:
        c = group.vkh
        sum_fd += c.fd * count
        sum_fp2 += c.fp * c.fp * count
        sum_eh += c.eh * count
        sum_v += c.v * count

    volume = _normalising_volume(sum_v, molecular_weight, volume_epsilon)
    if volume is None:
        return None

    delta_d = sum_fd / volume
    delta_p = math.sqrt(sum_fp2) / volume
    delta_h = math.sqrt(max(sum_eh, 0.0) / volume)
    return HSPResult.build(delta_d, delta_p, delta_h, HSPMethod.VAN_KREVELEN, volume, digits)


def stefanis(
    fragments: Optional[FragmentAssignment],
    molecular_weight: float,
    volume_epsilon: float = 1e-6,
    digits: Optional[int] = 2,
) -> Optional[HSPResult]:
    """
    Energy-based group contribution: δx = sqrt(ΣEx / V) for x in d, p, h.
    Same volume fallback as ``van_krevelen``.
    """
    if not fragments:
        return None

    sum_ed = sum_ep = sum_eh = sum_v = 0.0
    for group, count in fragments:
        c = group.energy
        sum_ed += c.ed * count
        sum_ep += c.ep * count
        sum_eh += c.eh * count
        sum_v += c.v * count

    volume = _normalising_volume(sum_v, molecular_weight, volume_epsilon)
    if volume is None:
        return None

    delta_d = math.sqrt(max(sum_ed, 0.0) / volume)
    delta_p = math.sqrt(max(sum_ep, 0.0) / volume)
    delta_h = math.sqrt(max(sum_eh, 0.0) / volume)
    return HSPResult.build(delta_d, delta_p, delta_h, HSPMethod.STEFANIS, volume, digits)


def eos_correction(
    base: Optional[HSPResult],
    temperature: float = REFERENCE_TEMPERATURE,
    digits: Optional[int] = 2,
) -> Optional[HSPResult]:
    """
    Linear temperature correction of a group-contribution result.

    Deltas scale by (1 - α·ΔT) and the molar volume by (1 + α·ΔT), with
    ΔT = T - 298.15 K. At 298.15 K the base values come back unchanged.
    """
    if base is None:
        return None

    dt = temperature - REFERENCE_TEMPERATURE
    shrink = 1.0 - EXPANSIVITY * dt
    swell = 1.0 + EXPANSIVITY * dt

    molar_volume = base.molar_volume * swell if base.molar_volume is not None else None
    return HSPResult.build(
        base.delta_d * shrink,
        base.delta_p * shrink,
        base.delta_h * shrink,
        HSPMethod.EOS,
        molar_volume,
        digits,
    )


def marcus(molecular_weight: float, digits: Optional[int] = 2) -> Optional[HSPResult]:
    """
    Weight-only estimate for salts and ionic liquids.

    The weight ratio r = min(MW / 150, 1.5) raises δD and lowers δP and δH:

        δD = 15 + 2·r,   δP = 14·(1 - r/3),   δH = 16·(1 - r/3)
    """
    if not molecular_weight or molecular_weight <= 0:
        return None

    ratio = min(molecular_weight / IONIC_REFERENCE_WEIGHT, IONIC_RATIO_CAP)
    delta_d = 15.0 + 2.0 * ratio
    delta_p = 14.0 * (1.0 - ratio / 3.0)
    delta_h = 16.0 * (1.0 - ratio / 3.0)
    molar_volume = molecular_weight / IONIC_DENSITY
    return HSPResult.build(delta_d, delta_p, delta_h, HSPMethod.MARCUS, molar_volume, digits)
