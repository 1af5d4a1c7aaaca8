"""
Functional-group catalogue used by the greedy fragmenter.

Each group carries two coefficient bundles:

* ``vkh``    – Van Krevelen & Hoftyzer constants: Fd and Fp in
  (J·cm³)^0.5/mol, Eh in J/mol, V in cm³/mol.
* ``energy`` – cohesive-energy contributions Ed, Ep, Eh in J/mol with
  their own molar volume V, for the Stefanis-style energy method.

Volumes are negative only for branch-point carbons (steric correction).
SMARTS patterns only contain the atoms a group claims; neighbour
requirements are written as recursive ``$()`` expressions so that a
ketone does not swallow the alkyl carbons next to it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class VKHContribution:
    fd: float
    fp: float
    eh: float
    v: float


@dataclass(frozen=True)
class EnergyContribution:
    ed: float
    ep: float
    eh: float
    v: float


@dataclass(frozen=True)
class FunctionalGroup:
    smarts: str
    name: str
    priority: int
    vkh: VKHContribution
    energy: EnergyContribution


def _group(smarts: str, name: str, priority: int,
           vkh: Tuple[float, float, float, float],
           energy: Tuple[float, float, float, float]) -> FunctionalGroup:
    return FunctionalGroup(smarts, name, priority, VKHContribution(*vkh), EnergyContribution(*energy))


# ─────────────────────────────────────────────────────────────────────────────
#   Group table (table order is the tie-break between equal priorities)
#                                                 Fd    Fp    Eh     V          Ed     Ep     Eh     V
# ─────────────────────────────────────────────────────────────────────────────
GROUP_TABLE: Tuple[FunctionalGroup, ...] = (
    # --- acids, nitro, esters ---
    _group("[CX3](=O)[OX2H1]", "-COOH (Acid)", 100, (530, 420, 10000, 28.5), (8300, 3900, 11300, 28.5)),
    _group("[N+](=O)[O-]", "-NO2 (Nitro)", 95, (500, 1070, 1500, 32.0), (9000, 12000, 1500, 32.0)),
    _group("[CX3](=O)[OX2H0]", "-COO- (Ester)", 90, (390, 490, 7000, 18.0), (10900, 2840, 5240, 18.0)),
    _group("[SX4](=O)(=O)", "-SO2- (Sulfone)", 89, (590, 1800, 6000, 27.0), (11000, 16000, 6000, 27.0)),
    _group("[SX3](=O)", ">S=O (Sulfoxide)", 88, (440, 1600, 5500, 22.0), (10000, 21000, 8000, 22.0)),

    # --- nitrogen carbonyls and other carbonyls ---
    _group("[CX3](=O)[NX3]", "-CONH- (Amide)", 85, (820, 1100, 8000, 25.0), (9500, 8000, 9000, 25.0)),
    _group("[CX3;$([CX3]([#6])[#6])]=O", ">C=O (Ketone)", 80, (290, 770, 2000, 10.8), (9270, 8410, 3810, 10.8)),
    _group("[CX3H1](=O)", "-CHO (Aldehyde)", 79, (470, 800, 4500, 21.0), (6000, 6000, 3500, 21.0)),

    # --- alcohols, aromatics, nitriles ---
    _group("[OX2H]", "-OH (Alcohol)", 75, (280, 600, 20000, 10.0), (5230, 4600, 20000, 10.0)),
    _group("c1ccccc1", "Phenyl Ring", 70, (1270, 110, 0, 52.4), (24200, 50, 290, 71.4)),
    _group("n1ccccc1", "Pyridine Ring", 70, (1400, 700, 3000, 72.0), (25000, 5700, 2500, 72.0)),
    _group("C#N", "-CN (Nitrile)", 65, (430, 1100, 2500, 24.0), (8750, 18630, 2140, 24.0)),

    # --- heteroatoms ---
    _group("[OD2;$(O([#6])[#6])]", "-O- (Ether)", 60, (100, 400, 3000, 3.8), (2330, 870, 2180, 3.8)),
    _group("[NX3;H2,H1;!$(NC=O)]", "-NH- (Amine)", 55, (70, 300, 2000, 4.0), (2500, 1600, 6000, 4.0)),
    _group("[NX3;H0;!$(NC=O);!$(N~[#8])]", ">N- (Tertiary Amine)", 54, (20, 800, 5000, 4.0), (1500, 2000, 3000, 4.0)),
    _group("[SX2H]", "-SH (Thiol)", 52, (440, 200, 2500, 28.0), (8000, 1000, 2500, 28.0)),
    _group("[SX2H0;$(S([#6])[#6])]", "-S- (Sulfide)", 51, (440, 0, 0, 12.0), (7000, 800, 500, 12.0)),
    _group("[Cl]", "-Cl", 50, (450, 550, 400, 24.0), (7000, 3000, 400, 24.0)),
    _group("[F]", "-F", 50, (180, 100, 400, 15.0), (2500, 1000, 400, 15.0)),
    _group("[Br]", "-Br", 50, (550, 400, 400, 30.0), (9000, 2500, 400, 30.0)),
    _group("[I]", "-I", 50, (655, 300, 400, 31.5), (11000, 2000, 400, 31.5)),

    # --- unsaturated carbon ---
    _group("[CX3H2]", "=CH2", 15, (400, 0, 0, 28.5), (4310, 0, 0, 28.5)),
    _group("[CX3H1]", "=CH-", 14, (200, 0, 0, 13.5), (4310, 0, 0, 13.5)),
    _group("[CX3H0]", "=C<", 13, (70, 0, 0, -5.5), (4310, 0, 0, -5.5)),

    # --- triple-bonded carbon (Fedors volumes) ---
    _group("[CX2H1;$(C#*)]", "#CH (Alkyne)", 12, (200, 0, 0, 27.4), (3850, 0, 0, 27.4)),
    _group("[CX2H0;$(C#*)]", "#C- (Alkyne)", 11, (70, 0, 0, 6.5), (7070, 0, 0, 6.5)),

    # --- carbon backbone (processed last) ---
    _group("[CH3]", "-CH3", 10, (420, 0, 0, 33.5), (4710, 0, 0, 33.5)),
    _group("[CH2]", "-CH2-", 9, (270, 0, 0, 16.1), (4940, 0, 0, 16.1)),
    _group("[CH1]", ">CH-", 8, (80, 0, 0, -1.0), (3430, 0, 0, -1.0)),
    _group("[CH0]", ">C<", 7, (-70, 0, 0, -19.2), (1470, 0, 0, -19.2)),

    # --- leftover aromatic atoms (fused or hetero rings) ---
    _group("[cH]", "=CH- (Aromatic)", 6, (230, 0, 0, 13.5), (4310, 0, 0, 13.5)),
    _group("[c;H0]", "=C< (Aromatic)", 5, (180, 0, 0, -5.5), (4310, 0, 0, -5.5)),
    _group("[n]", "=N- (Aromatic)", 5, (200, 600, 2500, 5.0), (5000, 3000, 2500, 5.0)),
)


def sort_by_priority(groups: Sequence[FunctionalGroup]) -> List[FunctionalGroup]:
    """Highest priority first; ``sorted`` is stable, so table order breaks ties."""
    return sorted(groups, key=lambda g: -g.priority)


def get_group(name: str) -> FunctionalGroup:
    for group in GROUP_TABLE:
        if group.name == name:
            return group
    raise KeyError(name)
