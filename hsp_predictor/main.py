from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .config import Config, load_config
from .distance import hansen_distance, is_miscible, rank_by_distance
from .fragmentation.core import GreedyFragmenter
from .logging_utils import get_logger
from .models import HSPMethod, HSPResult, Molecule
from .selector import MethodSelector, SelectionReport

logger = get_logger("calculator")

MethodLike = Union[HSPMethod, str]


class HSPCalculator:
    """
    Entry point for callers holding molecule records.
    """
    def __init__(self, config: Optional[Config] = None, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the calculator.

        Args:
            config: Ready configuration (takes precedence)
            config_path: YAML file layered on the defaults (optional)
        """
        self.config = config or load_config(config_path)
        self.fragmenter = GreedyFragmenter(
            add_hydrogens=self.config.fragmentation.add_hydrogens,
            disable_rdkit_log=self.config.engine.disable_rdkit_log,
        )
        self.selector = MethodSelector(self.fragmenter, self.config)

    def calculate(self, molecule: Molecule, method: MethodLike = HSPMethod.AUTO) -> Optional[HSPResult]:
        """
        Compute HSP without touching the molecule.

        Args:
            molecule: Molecule record
            method: AUTO for the selection policy, or one explicit method

        Returns:
            HSPResult, or None when an explicit method is unavailable
        """
        method = HSPMethod.from_label(method)
        return self.selector.compute(molecule, method)

    def evaluate(self, molecule: Molecule) -> SelectionReport:
        """Selection with every computed method and its error against the reference."""
        return self.selector.evaluate(molecule)

    def assign(self, molecule: Molecule, method: MethodLike = HSPMethod.AUTO) -> HSPResult:
        """
        Compute and attach HSP to the molecule, replacing any previous result.

        An unavailable method leaves a zeroed manual placeholder, so the
        molecule always ends up with a result.
        """
        result = self.calculate(molecule, method)
        if result is None:
            logger.info("%s unavailable for %s, using manual placeholder",
                        HSPMethod.from_label(method).value, molecule.name or molecule.smiles)
            result = HSPResult.placeholder()
        molecule.hsp = result
        return result

    def assign_many(
        self,
        molecules: Iterable[Molecule],
        method: MethodLike = HSPMethod.AUTO,
        max_workers: Optional[int] = None,
    ) -> List[HSPResult]:
        """Assign HSP to several molecules in parallel; results follow input order."""
        molecules = list(molecules)
        if not molecules:
            return []
        max_workers = max_workers or self.config.selection.max_workers

        # Small batches are not worth a pool
        if len(molecules) < 2 or max_workers <= 1:
            return [self.assign(m, method) for m in molecules]

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(lambda m: self.assign(m, method), molecules))

    def set_manual(self, molecule: Molecule, delta_d: float, delta_p: float, delta_h: float) -> HSPResult:
        """Store hand-entered values on the molecule."""
        result = HSPResult.manual(delta_d, delta_p, delta_h)
        molecule.hsp = result
        return result

    # ───────────────────────── comparisons ──────────────────────────
    @staticmethod
    def distance(a: HSPResult, b: HSPResult) -> float:
        return hansen_distance(a, b)

    def miscible(self, a: HSPResult, b: HSPResult) -> bool:
        return is_miscible(a, b, self.config.distance.miscibility_threshold)

    @staticmethod
    def rank_by_distance(target: Molecule, molecules: Iterable[Molecule]) -> List[Tuple[Molecule, float]]:
        return rank_by_distance(target, molecules)
