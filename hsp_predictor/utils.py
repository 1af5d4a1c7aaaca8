import re
from typing import Optional

from .errors import SmilesParseError
from .fragmentation.graph_adapter import RDKitEngine, get_engine

# A charge sign inside a bracket atom, e.g. [Na+] or [O-]
_CHARGE_MARKER = re.compile(r"\[[^\]]*[+-][^\]]*\]")


def is_ionic(smiles: Optional[str], engine: Optional[RDKitEngine] = None) -> bool:
    """
    Whether a SMILES describes a salt or ionic liquid.

    Parsed molecules count as ionic when they have several disconnected
    components or a non-zero net charge; zwitterions and nitro groups do not,
    although their SMILES carry explicit charge markers. Unparseable strings
    fall back to the textual markers ('.' or a charged bracket atom).
    """
    if not smiles or not isinstance(smiles, str):
        return False

    engine = engine or get_engine()
    try:
        with engine.molecule(smiles, add_hydrogens=False) as mol:
            if engine.component_count(mol) > 1:
                return True
            return engine.has_charged_atoms(mol) and engine.net_charge(mol) != 0
    except SmilesParseError:
        return "." in smiles or bool(_CHARGE_MARKER.search(smiles))


def is_structurally_complex(smiles: Optional[str], length_threshold: int = 15) -> bool:
    """Crude complexity proxy: a long SMILES, or one with both O and N."""
    if not smiles:
        return False
    upper = smiles.upper()
    return len(smiles) > length_threshold or ("O" in upper and "N" in upper)
