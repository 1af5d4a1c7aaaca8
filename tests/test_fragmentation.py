"""
Greedy fragmentation over the RDKit graph adapter.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from rdkit import Chem

from hsp_predictor.errors import PatternCompileError, SmilesParseError
from hsp_predictor.fragmentation import GreedyFragmenter, get_engine
from hsp_predictor.fragmentation.group_tables import (
    GROUP_TABLE,
    EnergyContribution,
    FunctionalGroup,
    VKHContribution,
    get_group,
    sort_by_priority,
)


def _custom(smarts, name, priority):
    return FunctionalGroup(smarts, name, priority, VKHContribution(1, 0, 0, 1), EnergyContribution(1, 0, 0, 1))


@pytest.fixture(scope="module")
def fragmenter():
    return GreedyFragmenter()


class TestGraphAdapter:

    def test_engine_is_shared_across_threads(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            engines = list(pool.map(lambda _: get_engine(), range(32)))
        assert all(e is engines[0] for e in engines)

    @pytest.mark.parametrize("smiles", [None, "", "   ", "C1CC", "C(C"])
    def test_parse_errors(self, smiles):
        with pytest.raises(SmilesParseError):
            get_engine().parse(smiles)

    def test_parse_adds_hydrogens(self):
        engine = get_engine()
        assert engine.parse("C").GetNumAtoms() == 5
        assert engine.parse("C", add_hydrogens=False).GetNumAtoms() == 1

    def test_bad_smarts(self):
        with pytest.raises(PatternCompileError):
            get_engine().compile_matcher("[C")

    def test_structure_queries(self):
        engine = get_engine()
        salt = engine.parse("[Na+].[Cl-]", add_hydrogens=False)
        assert engine.component_count(salt) == 2
        assert engine.net_charge(salt) == 0
        assert engine.has_charged_atoms(salt)

    def test_scoped_handles(self):
        engine = get_engine()
        with engine.molecule("CCO") as mol, engine.matcher("[OX2H]") as pattern:
            assert mol.GetNumAtoms() == 9
            assert engine.find_all_matches(mol, pattern) == [frozenset([2])]
        with pytest.raises(SmilesParseError):
            with engine.molecule("C(C"):
                pass


class TestGroupTable:

    def test_every_pattern_compiles(self):
        engine = get_engine()
        for group in GROUP_TABLE:
            assert engine.compile_matcher(group.smarts) is not None, group.name

    def test_negative_volumes_only_on_carbon_groups(self):
        engine = get_engine()
        for group in GROUP_TABLE:
            if group.vkh.v < 0 or group.energy.v < 0:
                pattern = engine.compile_matcher(group.smarts)
                assert all(a.GetAtomicNum() == 6 for a in pattern.GetAtoms()), group.name

    def test_sort_is_descending_and_stable(self):
        ordered = sort_by_priority(GROUP_TABLE)
        priorities = [g.priority for g in ordered]
        assert priorities == sorted(priorities, reverse=True)
        names = [g.name for g in ordered]
        assert names.index("Phenyl Ring") < names.index("Pyridine Ring")

    def test_get_group(self):
        assert get_group("-OH (Alcohol)").priority == 75
        with pytest.raises(KeyError):
            get_group("no such group")


class TestGreedyFragmenter:

    @pytest.mark.parametrize("smiles, expected", [
        ("CCO", {"-OH (Alcohol)": 1, "-CH2-": 1, "-CH3": 1}),
        ("CC(=O)O", {"-COOH (Acid)": 1, "-CH3": 1}),
        ("CC(C)=O", {">C=O (Ketone)": 1, "-CH3": 2}),
        ("CCOC(C)=O", {"-COO- (Ester)": 1, "-CH3": 2, "-CH2-": 1}),
        ("Cc1ccccc1", {"Phenyl Ring": 1, "-CH3": 1}),
        ("CCOCC", {"-O- (Ether)": 1, "-CH3": 2, "-CH2-": 2}),
        ("C#C", {"#CH (Alkyne)": 2}),
        ("CC#CC", {"#C- (Alkyne)": 2, "-CH3": 2}),
        ("CC#N", {"-CN (Nitrile)": 1, "-CH3": 1}),
    ])
    def test_group_counts(self, fragmenter, smiles, expected):
        assert fragmenter.fragment(smiles).counts() == expected

    @pytest.mark.parametrize("smiles", [
        "CCO", "CC(=O)O", "CC(C)Cc1ccc(C(C)C(=O)O)cc1", "Cn1c(=O)c2c(ncn2C)n(C)c1=O",
        "O=[N+]([O-])c1ccccc1", "CS(C)=O", "ClC(Cl)Cl",
    ])
    def test_no_atom_claimed_twice(self, fragmenter, smiles):
        result = fragmenter.fragment(smiles)
        claimed = [atom for frag in result.fragments for match in frag.atoms for atom in match]
        assert len(claimed) == len(set(claimed)) == len(result.consumed)

    def test_acid_claims_before_alcohol(self, fragmenter):
        counts = fragmenter.fragment("CC(=O)O").counts()
        assert "-OH (Alcohol)" not in counts
        assert ">C=O (Ketone)" not in counts

    @pytest.mark.parametrize("smiles", [None, "", "C1CC", "[H][H]"])
    def test_no_fragments(self, fragmenter, smiles):
        assert fragmenter.fragment(smiles) is None

    def test_water_has_no_alcohol_group(self, fragmenter):
        assert fragmenter.fragment("O") is None

    def test_iteration_yields_group_and_count(self, fragmenter):
        pairs = {group.name: count for group, count in fragmenter.fragment("CCCC")}
        assert pairs == {"-CH3": 2, "-CH2-": 2}

    def test_bad_pattern_is_skipped(self, caplog):
        groups = [_custom("[C", "broken", 50), get_group("-CH3")]
        frag = GreedyFragmenter(groups=groups)
        with caplog.at_level(logging.WARNING, logger="hsp_predictor"):
            result = frag.fragment("CC")
        assert result.counts() == {"-CH3": 2}
        messages = [r.getMessage() for r in caplog.records]
        assert any("broken" in m for m in messages)
        assert not any(m.startswith("[") for m in messages)

    def test_table_order_breaks_priority_ties(self):
        first = _custom("[CH3]", "first", 5)
        second = _custom("[CH3]", "second", 5)
        assert GreedyFragmenter(groups=[first, second]).fragment("CC").counts() == {"first": 2}
        assert GreedyFragmenter(groups=[second, first]).fragment("CC").counts() == {"second": 2}

    def test_priority_beats_table_order(self):
        low = _custom("[CH3]", "low", 1)
        high = _custom("[CH3]", "high", 9)
        assert GreedyFragmenter(groups=[low, high]).fragment("CC").counts() == {"high": 2}

    def test_overlapping_match_dropped_whole(self):
        # Both C-C pairs of propane share the middle carbon
        pair = _custom("[#6]-[#6]", "pair", 5)
        result = GreedyFragmenter(groups=[pair]).fragment("CCC")
        assert result.counts() == {"pair": 1}
        assert len(result.consumed) == 2

    def test_fragment_mol_accepts_parsed_molecule(self, fragmenter):
        mol = Chem.AddHs(Chem.MolFromSmiles("CCO"))
        assert fragmenter.fragment_mol(mol).counts() == fragmenter.fragment("CCO").counts()
