"""
Runs the prediction methods for a molecule, validates them against the
experimental table and picks the result to keep.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

from . import aggregation, reference_data
from .config import Config, default_config
from .distance import hansen_distance
from .fragmentation.core import GreedyFragmenter
from .logging_utils import get_logger
from .models import HSPMethod, HSPResult, Molecule
from .utils import is_ionic, is_structurally_complex

logger = get_logger("selector")


@dataclass
class SelectionReport:
    """
    Everything the selector computed for one molecule.

    ``ranking`` lists (method, Ra to reference) with the lowest error first
    and is empty when no reference entry exists.
    """

    molecule_name: str
    selected: HSPResult
    results: Dict[HSPMethod, HSPResult] = field(default_factory=dict)
    reference: Optional[HSPResult] = None
    ranking: List[Tuple[HSPMethod, float]] = field(default_factory=list)

    @property
    def best_method(self) -> Optional[HSPMethod]:
        return self.ranking[0][0] if self.ranking else None

    def to_frame(self) -> pd.DataFrame:
        """Validation table, one row per computed method."""
        errors = dict(self.ranking)
        ranks = {method: i + 1 for i, (method, _) in enumerate(self.ranking)}
        rows = []
        for method, res in self.results.items():
            rows.append({
                "method": method.value,
                "deltaD": res.delta_d,
                "deltaP": res.delta_p,
                "deltaH": res.delta_h,
                "deltaT": res.delta_t,
                "molarVolume": res.molar_volume,
                "ra_to_reference": errors.get(method, float("nan")),
                "rank": ranks.get(method),
            })
        columns = ["method", "deltaD", "deltaP", "deltaH", "deltaT", "molarVolume", "ra_to_reference", "rank"]
        df = pd.DataFrame(rows, columns=columns)
        if self.ranking:
            df = df.sort_values("rank").reset_index(drop=True)
        return df


class MethodSelector:
    """
    Selection policy:

    1. a reference entry always wins; predictions are ranked against it
    2. otherwise Marcus for ionic SMILES, Stefanis for complex molecules,
       then Van Krevelen, then EoS
    3. otherwise a zeroed manual placeholder
    """

    def __init__(self, fragmenter: Optional[GreedyFragmenter] = None, config: Optional[Config] = None):
        self.config = config or default_config()
        self.fragmenter = fragmenter or GreedyFragmenter(
            add_hydrogens=self.config.fragmentation.add_hydrogens,
            disable_rdkit_log=self.config.engine.disable_rdkit_log,
        )

    # ───────────────────────── method runs ──────────────────────────
    def compute_all(self, molecule: Molecule) -> Dict[HSPMethod, HSPResult]:
        """Run every method that applies to the molecule; unavailable ones are left out."""
        m = self.config.methods
        fragments = self.fragmenter.fragment(molecule.smiles)

        vkh = aggregation.van_krevelen(fragments, molecule.molecular_weight, m.volume_epsilon, m.round_digits)
        candidates = {
            HSPMethod.VAN_KREVELEN: vkh,
            HSPMethod.STEFANIS: aggregation.stefanis(
                fragments, molecule.molecular_weight, m.volume_epsilon, m.round_digits
            ),
            HSPMethod.EOS: aggregation.eos_correction(vkh, m.temperature_k, m.round_digits),
            HSPMethod.MARCUS: (
                aggregation.marcus(molecule.molecular_weight, m.round_digits)
                if is_ionic(molecule.smiles, self.fragmenter.engine) else None
            ),
        }
        return {method: res for method, res in candidates.items() if res is not None}

    def compute(self, molecule: Molecule, method: HSPMethod) -> Optional[HSPResult]:
        """
        Result of exactly one method, bypassing the selection policy.

        MANUAL keeps the numbers of the molecule's current result under the
        new tag; EXPERIMENTAL is the reference entry. None means unavailable.
        """
        method = HSPMethod.from_label(method)
        m = self.config.methods

        if method is HSPMethod.AUTO:
            return self.evaluate(molecule).selected
        if method is HSPMethod.MANUAL:
            if molecule.hsp is None:
                return HSPResult.placeholder()
            return molecule.hsp.with_method(HSPMethod.MANUAL)
        if method is HSPMethod.EXPERIMENTAL:
            return self.lookup_reference(molecule)
        if method is HSPMethod.MARCUS:
            if not is_ionic(molecule.smiles, self.fragmenter.engine):
                return None
            return aggregation.marcus(molecule.molecular_weight, m.round_digits)

        fragments = self.fragmenter.fragment(molecule.smiles)
        if method is HSPMethod.STEFANIS:
            return aggregation.stefanis(fragments, molecule.molecular_weight, m.volume_epsilon, m.round_digits)

        vkh = aggregation.van_krevelen(fragments, molecule.molecular_weight, m.volume_epsilon, m.round_digits)
        if method is HSPMethod.VAN_KREVELEN:
            return vkh
        if method is HSPMethod.EOS:
            return aggregation.eos_correction(vkh, m.temperature_k, m.round_digits)

        raise AssertionError(f"Unhandled method {method}")

    # ───────────────────────── validation ──────────────────────────
    @staticmethod
    def lookup_reference(molecule: Molecule) -> Optional[HSPResult]:
        for name in molecule.preferred_names():
            entry = reference_data.lookup(name)
            if entry is not None:
                return entry
        return None

    @staticmethod
    def rank_against_reference(
        results: Dict[HSPMethod, HSPResult],
        reference: HSPResult,
    ) -> List[Tuple[HSPMethod, float]]:
        """(method, Ra) pairs, lowest error first."""
        ranking = [(method, hansen_distance(res, reference)) for method, res in results.items()]
        ranking.sort(key=lambda x: x[1])
        return ranking

    # ───────────────────────── selection ──────────────────────────
    def evaluate(self, molecule: Molecule) -> SelectionReport:
        """Run the full selection for one molecule."""
        label = molecule.name or molecule.english_name or (molecule.smiles or "<unnamed>")
        reference = self.lookup_reference(molecule)
        results = self.compute_all(molecule)

        if reference is not None:
            ranking = self.rank_against_reference(results, reference)
            if ranking:
                best, err = ranking[0]
                logger.info("%s: reference found, closest prediction %s (Ra=%.2f)",
                            label, best.value, err)
            else:
                logger.info("%s: reference found, no prediction available", label)
            return SelectionReport(label, reference, results, reference, ranking)

        selected = self._choose_without_reference(molecule, results)
        logger.info("%s: no reference, selected %s", label, selected.method.value)
        return SelectionReport(label, selected, results)

    def _choose_without_reference(
        self,
        molecule: Molecule,
        results: Dict[HSPMethod, HSPResult],
    ) -> HSPResult:
        if HSPMethod.MARCUS in results:
            return results[HSPMethod.MARCUS]

        complex_limit = self.config.selection.complex_smiles_length
        if HSPMethod.STEFANIS in results and is_structurally_complex(molecule.smiles, complex_limit):
            return results[HSPMethod.STEFANIS]

        for method in (HSPMethod.VAN_KREVELEN, HSPMethod.EOS):
            if method in results:
                return results[method]

        logger.info("No viable method, using manual placeholder")
        return HSPResult.placeholder()
