"""
Hansen Solubility Parameter prediction package

Predicts dispersion, polar and hydrogen-bonding solubility parameters from
SMILES by functional-group contribution, validates the predictions against
experimental values and ranks substances by Hansen distance.
"""

from .models import HSPMethod, HSPResult, Molecule
from .main import HSPCalculator
from .selector import MethodSelector, SelectionReport
from .distance import hansen_distance, rank_by_distance, is_miscible
from .reference_data import lookup as lookup_reference

__version__ = "1.0.0"

__all__ = [
    'HSPMethod',
    'HSPResult',
    'Molecule',
    'HSPCalculator',
    'MethodSelector',
    'SelectionReport',
    'hansen_distance',
    'rank_by_distance',
    'is_miscible',
    'lookup_reference',
]
