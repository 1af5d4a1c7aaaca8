"""
Hansen distance Ra and the helpers built on it.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .models import HSPResult, Molecule

# Dispersion differences count double before squaring (Hansen sphere).
DISPERSION_WEIGHT = 4.0
_WEIGHTS = np.array([DISPERSION_WEIGHT, 1.0, 1.0])

DEFAULT_MISCIBILITY_THRESHOLD = 8.0


def _weighted_norm(diff: np.ndarray) -> np.ndarray:
    """Ra for component differences laid out along the last axis."""
    return np.sqrt(np.sum(_WEIGHTS * diff * diff, axis=-1))


def hansen_distance(a: HSPResult, b: HSPResult) -> float:
    """
    Ra = sqrt(4·(D1-D2)² + (P1-P2)² + (H1-H2)²)

    Args:
        a: First HSP result
        b: Second HSP result

    Returns:
        Hansen distance in MPa^0.5
    """
    return float(_weighted_norm(a.as_vector() - b.as_vector()))


def distance_matrix(results: Sequence[HSPResult]) -> np.ndarray:
    """Pairwise Ra for a list of results, shape (n, n)."""
    if not results:
        return np.zeros((0, 0))
    vectors = np.stack([r.as_vector() for r in results])
    return _weighted_norm(vectors[:, None, :] - vectors[None, :, :])


def relative_energy_difference(a: HSPResult, b: HSPResult, interaction_radius: float) -> float:
    """RED = Ra / R0. Below 1 the pair sits inside the interaction sphere."""
    if interaction_radius <= 0:
        raise ValueError("interaction_radius must be positive")
    return hansen_distance(a, b) / interaction_radius


def is_miscible(a: HSPResult, b: HSPResult, threshold: float = DEFAULT_MISCIBILITY_THRESHOLD) -> bool:
    """Display convention: Ra below ``threshold`` reads as "likely miscible"."""
    return hansen_distance(a, b) < threshold


def rank_by_distance(
    target: Molecule,
    molecules: Iterable[Molecule],
) -> List[Tuple[Molecule, float]]:
    """
    Sort molecules by Ra to a target molecule, closest first.

    Molecules without HSP, and the target itself, are left out.

    Args:
        target: Molecule whose HSP defines the reference point
        molecules: Candidates, e.g. all molecules of a project

    Returns:
        List of (molecule, Ra) pairs
    """
    if target.hsp is None:
        return []

    ranked = []
    for mol in molecules:
        if mol is target or mol.hsp is None:
            continue
        if target.id is not None and mol.id == target.id:
            continue
        ranked.append((mol, hansen_distance(mol.hsp, target.hsp)))

    ranked.sort(key=lambda x: x[1])
    return ranked


def closest(target: Molecule, molecules: Iterable[Molecule]) -> Optional[Tuple[Molecule, float]]:
    ranked = rank_by_distance(target, molecules)
    return ranked[0] if ranked else None
