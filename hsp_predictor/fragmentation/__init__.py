"""
Functional-group fragmentation
------------------------------

* RDKit-backed SMILES parsing and SMARTS matching behind one shared engine
* Static functional-group table with Van Krevelen and energy coefficients
* Greedy, priority-ordered assignment with no atom counted twice
"""

from .graph_adapter import RDKitEngine, get_engine
from .group_tables import GROUP_TABLE, FunctionalGroup, VKHContribution, EnergyContribution, sort_by_priority
from .core import Fragment, FragmentAssignment, GreedyFragmenter

__all__ = [
    'RDKitEngine',
    'get_engine',
    'GROUP_TABLE',
    'FunctionalGroup',
    'VKHContribution',
    'EnergyContribution',
    'sort_by_priority',
    'Fragment',
    'FragmentAssignment',
    'GreedyFragmenter',
]
