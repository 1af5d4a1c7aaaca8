"""
Thin RDKit boundary: SMILES parsing, SMARTS compilation and substructure
matching. Everything above this module sees atom-index sets only.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import FrozenSet, Iterator, List, Optional
import threading

from rdkit import Chem, rdBase

from ..errors import PatternCompileError, SmilesParseError
from ..logging_utils import get_logger

logger = get_logger("graph_adapter")

# Upper bound handed to RDKit; the default of 1000 truncates large polymers.
_MAX_MATCHES = 100000


class RDKitEngine:
    """
    Process-wide handle on RDKit. Obtain it through ``get_engine()``.
    """

    def __init__(self, disable_log: bool = True):
        if disable_log:
            rdBase.DisableLog("rdApp.*")
        self.version = rdBase.rdkitVersion
        logger.info("RDKit %s initialised for HSP calculations", self.version)

    # ───────────────────────── parsing ──────────────────────────
    def parse(self, smiles: Optional[str], add_hydrogens: bool = True) -> Chem.Mol:
        """
        Parse a SMILES string into a molecule.

        Args:
            smiles: Connectivity string
            add_hydrogens: Whether to make hydrogens explicit atoms

        Returns:
            RDKit molecule

        Raises:
            SmilesParseError: Empty or unparseable SMILES
        """
        if not isinstance(smiles, str) or not smiles.strip():
            raise SmilesParseError(smiles)
        mol = Chem.MolFromSmiles(smiles.strip())
        if mol is None or mol.GetNumAtoms() == 0:
            raise SmilesParseError(smiles)
        if add_hydrogens:
            mol = Chem.AddHs(mol)
        return mol

    def compile_matcher(self, smarts: str) -> Chem.Mol:
        """Compile a SMARTS pattern, raising PatternCompileError if malformed."""
        pattern = Chem.MolFromSmarts(smarts) if smarts else None
        if pattern is None:
            raise PatternCompileError(smarts)
        return pattern

    def find_all_matches(self, mol: Chem.Mol, matcher: Chem.Mol) -> List[FrozenSet[int]]:
        """All unique matches of ``matcher`` in ``mol``, in RDKit's order."""
        matches = mol.GetSubstructMatches(matcher, uniquify=True, maxMatches=_MAX_MATCHES)
        return [frozenset(match) for match in matches]

    # ───────────────────────── scoped handles ──────────────────────────
    # RDKit objects are reference counted: they are freed once the caller's
    # ``with ... as`` binding is the last reference and goes away.
    @contextmanager
    def molecule(self, smiles: Optional[str], add_hydrogens: bool = True) -> Iterator[Chem.Mol]:
        """Parsed molecule for the duration of a ``with`` block."""
        yield self.parse(smiles, add_hydrogens=add_hydrogens)

    @contextmanager
    def matcher(self, smarts: str) -> Iterator[Chem.Mol]:
        yield self.compile_matcher(smarts)

    # ───────────────────────── structure queries ──────────────────────────
    @staticmethod
    def component_count(mol: Chem.Mol) -> int:
        return len(Chem.GetMolFrags(mol))

    @staticmethod
    def net_charge(mol: Chem.Mol) -> int:
        return Chem.GetFormalCharge(mol)

    @staticmethod
    def has_charged_atoms(mol: Chem.Mol) -> bool:
        return any(atom.GetFormalCharge() != 0 for atom in mol.GetAtoms())


_engine: Optional[RDKitEngine] = None
_engine_lock = threading.Lock()


def get_engine(disable_log: bool = True) -> RDKitEngine:
    """
    Return the shared RDKitEngine, creating it on first use.

    Creation happens under a lock, so concurrent first callers all receive
    the same instance. ``disable_log`` only matters for that first call.
    """
    global _engine
    if _engine is not None:
        return _engine
    with _engine_lock:
        if _engine is None:
            _engine = RDKitEngine(disable_log=disable_log)
    return _engine
