"""
Experimental Hansen parameters of common solvents (Hansen handbook values,
MPa^0.5), keyed by canonical English name, with alternate spellings.
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple
import unicodedata

from .models import HSPMethod, HSPResult

#                              δD     δP     δH
REFERENCE_HSP: Dict[str, Tuple[float, float, float]] = {
    "water": (15.5, 16.0, 42.3),
    "methanol": (15.1, 12.3, 22.3),
    "ethanol": (15.8, 8.8, 19.4),
    "1-propanol": (16.0, 6.8, 17.4),
    "isopropanol": (15.8, 6.1, 16.4),
    "1-butanol": (16.0, 5.7, 15.8),
    "ethylene glycol": (17.0, 11.0, 26.0),
    "glycerol": (17.4, 12.1, 29.3),
    "acetone": (15.5, 10.4, 7.0),
    "methyl ethyl ketone": (16.0, 9.0, 5.1),
    "ethyl acetate": (15.8, 5.3, 7.2),
    "acetic acid": (14.5, 8.0, 13.5),
    "diethyl ether": (14.5, 2.9, 5.1),
    "tetrahydrofuran": (16.8, 5.7, 8.0),
    "1,4-dioxane": (17.5, 1.8, 9.0),
    "acetonitrile": (15.3, 18.0, 6.1),
    "dimethyl sulfoxide": (18.4, 16.4, 10.2),
    "dimethylformamide": (17.4, 13.7, 11.3),
    "n-methyl-2-pyrrolidone": (18.0, 12.3, 7.2),
    "formamide": (17.2, 26.2, 19.0),
    "propylene carbonate": (20.0, 18.0, 4.1),
    "hexane": (14.9, 0.0, 0.0),
    "heptane": (15.3, 0.0, 0.0),
    "cyclohexane": (16.8, 0.0, 0.2),
    "benzene": (18.4, 0.0, 2.0),
    "toluene": (18.0, 1.4, 2.0),
    "xylene": (17.6, 1.0, 3.1),
    "styrene": (18.6, 1.0, 4.1),
    "phenol": (18.0, 5.9, 14.9),
    "pyridine": (19.0, 8.8, 5.9),
    "nitrobenzene": (20.0, 8.6, 4.1),
    "chloroform": (17.8, 3.1, 5.7),
    "dichloromethane": (18.2, 6.3, 6.1),
    "carbon tetrachloride": (17.8, 0.0, 0.6),
}

# Alternate spellings, stored already folded (lowercase, no accents).
ALIASES: Dict[str, str] = {
    "agua": "water",
    "h2o": "water",
    "metanol": "methanol",
    "methyl alcohol": "methanol",
    "etanol": "ethanol",
    "ethyl alcohol": "ethanol",
    "alcool etilico": "ethanol",
    "n-propanol": "1-propanol",
    "propanol": "1-propanol",
    "2-propanol": "isopropanol",
    "isopropyl alcohol": "isopropanol",
    "alcool isopropilico": "isopropanol",
    "butanol": "1-butanol",
    "n-butanol": "1-butanol",
    "etilenoglicol": "ethylene glycol",
    "glicerol": "glycerol",
    "glicerina": "glycerol",
    "glycerin": "glycerol",
    "acetona": "acetone",
    "mek": "methyl ethyl ketone",
    "butanone": "methyl ethyl ketone",
    "acetato de etila": "ethyl acetate",
    "acido acetico": "acetic acid",
    "ether": "diethyl ether",
    "eter etilico": "diethyl ether",
    "thf": "tetrahydrofuran",
    "tetrahidrofurano": "tetrahydrofuran",
    "dioxane": "1,4-dioxane",
    "dioxano": "1,4-dioxane",
    "acetonitrila": "acetonitrile",
    "dmso": "dimethyl sulfoxide",
    "dimetilsulfoxido": "dimethyl sulfoxide",
    "dmf": "dimethylformamide",
    "n,n-dimethylformamide": "dimethylformamide",
    "dimetilformamida": "dimethylformamide",
    "nmp": "n-methyl-2-pyrrolidone",
    "formamida": "formamide",
    "carbonato de propileno": "propylene carbonate",
    "n-hexane": "hexane",
    "hexano": "hexane",
    "n-heptane": "heptane",
    "heptano": "heptane",
    "ciclohexano": "cyclohexane",
    "benzeno": "benzene",
    "tolueno": "toluene",
    "xileno": "xylene",
    "estireno": "styrene",
    "fenol": "phenol",
    "piridina": "pyridine",
    "nitrobenzeno": "nitrobenzene",
    "cloroformio": "chloroform",
    "trichloromethane": "chloroform",
    "diclorometano": "dichloromethane",
    "methylene chloride": "dichloromethane",
    "dcm": "dichloromethane",
    "tetracloreto de carbono": "carbon tetrachloride",
}


def normalise_name(name: str) -> str:
    """Trim, lowercase, strip accents and collapse inner whitespace."""
    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(folded.split())


def canonical_key(name: Optional[str]) -> Optional[str]:
    """Canonical table key for a name or alias, None if unknown."""
    if not name or not isinstance(name, str):
        return None
    key = normalise_name(name)
    if key in REFERENCE_HSP:
        return key
    return ALIASES.get(key)


def lookup(name: Optional[str]) -> Optional[HSPResult]:
    """
    Experimental HSP for a substance name.

    Args:
        name: Canonical name or alias, any case, surrounding spaces allowed

    Returns:
        HSPResult tagged EXPERIMENTAL, or None when the name is unknown
    """
    key = canonical_key(name)
    if key is None:
        return None
    d, p, h = REFERENCE_HSP[key]
    return HSPResult(d, p, h, HSPMethod.EXPERIMENTAL)
