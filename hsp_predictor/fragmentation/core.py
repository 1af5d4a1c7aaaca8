"""
Greedy, priority-ordered decomposition of a molecule into functional groups.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Set, Tuple

from rdkit import Chem

from ..errors import PatternCompileError, SmilesParseError
from ..logging_utils import get_logger
from .graph_adapter import RDKitEngine, get_engine
from .group_tables import GROUP_TABLE, FunctionalGroup, sort_by_priority

logger = get_logger("fragmentation")


@dataclass(frozen=True)
class Fragment:
    """One functional group with its accepted, non-overlapping matches."""

    group: FunctionalGroup
    atoms: Tuple[FrozenSet[int], ...]

    @property
    def count(self) -> int:
        return len(self.atoms)


@dataclass(frozen=True)
class FragmentAssignment:
    """
    Result of a fragmentation pass. Iterating yields ``(group, count)``
    pairs in the order the groups were processed.
    """

    fragments: Tuple[Fragment, ...]
    consumed: FrozenSet[int]

    def __iter__(self) -> Iterator[Tuple[FunctionalGroup, int]]:
        for frag in self.fragments:
            yield frag.group, frag.count

    def __len__(self) -> int:
        return len(self.fragments)

    def counts(self) -> Dict[str, int]:
        """{group name: count}"""
        return {frag.group.name: frag.count for frag in self.fragments}


class GreedyFragmenter:
    """
    Assign atoms to functional groups, most specific groups first.

    Groups are visited in descending priority (stable table order between
    equal priorities). A match is accepted only when none of its atoms has
    been claimed yet; an overlapping match is dropped as a whole.
    """

    def __init__(
        self,
        groups: Optional[Sequence[FunctionalGroup]] = None,
        engine: Optional[RDKitEngine] = None,
        add_hydrogens: bool = True,
        disable_rdkit_log: bool = True,
    ):
        """
        Args:
            groups: Functional-group table. Defaults to ``GROUP_TABLE``
            engine: RDKit engine. Defaults to the shared one, fetched lazily
            add_hydrogens: Make hydrogens explicit before matching
            disable_rdkit_log: Silence RDKit parser messages if this call creates the engine
        """
        self.groups = sort_by_priority(groups if groups is not None else GROUP_TABLE)
        self._engine = engine
        self.add_hydrogens = add_hydrogens
        self.disable_rdkit_log = disable_rdkit_log

    @property
    def engine(self) -> RDKitEngine:
        if self._engine is None:
            self._engine = get_engine(disable_log=self.disable_rdkit_log)
        return self._engine

    # ───────────────────────── public API ──────────────────────────
    def fragment(self, smiles: Optional[str]) -> Optional[FragmentAssignment]:
        """
        Decompose a SMILES string into functional groups.

        Args:
            smiles: Connectivity string, may be None

        Returns:
            FragmentAssignment, or None when the SMILES is absent or
            unparseable or when no group matched
        """
        try:
            with self.engine.molecule(smiles, add_hydrogens=self.add_hydrogens) as mol:
                return self.fragment_mol(mol)
        except SmilesParseError as e:
            logger.debug("No fragments: %s", e.message)
            return None

    def fragment_mol(self, mol: Chem.Mol) -> Optional[FragmentAssignment]:
        consumed: Set[int] = set()
        fragments: List[Fragment] = []

        for group in self.groups:
            try:
                with self.engine.matcher(group.smarts) as matcher:
                    matches = self.engine.find_all_matches(mol, matcher)
            except PatternCompileError as e:
                logger.warning("Skipping group %s: %s", group.name, e.message)
                continue

            accepted = []
            for atoms in matches:
                if consumed.isdisjoint(atoms):
                    accepted.append(atoms)
                    consumed.update(atoms)

            if accepted:
                logger.debug("  - %s: %d match(es)", group.name, len(accepted))
                fragments.append(Fragment(group, tuple(accepted)))

        if not fragments:
            return None
        return FragmentAssignment(tuple(fragments), frozenset(consumed))
