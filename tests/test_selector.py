"""
Method selection, validation against reference values and the calculator facade.
"""

import logging

import pytest

from hsp_predictor import HSPCalculator, HSPMethod, HSPResult, Molecule
from hsp_predictor.config import default_config, update_config
from hsp_predictor.errors import UnknownMethodError
from hsp_predictor.selector import MethodSelector


@pytest.fixture(scope="module")
def calculator():
    return HSPCalculator()


@pytest.fixture
def ethanol():
    return Molecule("CCO", 46.07, name="Etanol", english_name="ethanol", id="m1")


@pytest.fixture
def salt():
    return Molecule("[Na+].[Cl-]", 58.44, name="sodium chloride", id="m2")


class TestAutoSelection:

    def test_reference_wins(self, calculator, ethanol):
        hsp = calculator.assign(ethanol)
        assert hsp.method is HSPMethod.EXPERIMENTAL
        assert (hsp.delta_d, hsp.delta_p, hsp.delta_h) == (15.8, 8.8, 19.4)
        assert ethanol.hsp is hsp

    def test_predictions_ranked_against_reference(self, calculator, ethanol):
        report = calculator.evaluate(ethanol)
        assert set(report.results) == {HSPMethod.VAN_KREVELEN, HSPMethod.STEFANIS, HSPMethod.EOS}
        errors = [err for _, err in report.ranking]
        assert errors == sorted(errors)
        assert report.best_method is HSPMethod.STEFANIS
        assert report.reference == report.selected

    def test_missing_structure_gets_placeholder(self, calculator):
        mol = Molecule(None, 100.0, name="Mystery compound")
        assert calculator.calculate(mol, HSPMethod.VAN_KREVELEN) is None
        hsp = calculator.assign(mol)
        assert (hsp.delta_d, hsp.delta_p, hsp.delta_h) == (0.0, 0.0, 0.0)
        assert hsp.method is HSPMethod.MANUAL

    def test_salt_uses_marcus(self, calculator, salt):
        hsp = calculator.assign(salt)
        assert hsp.method is HSPMethod.MARCUS
        assert hsp.delta_p > 0 and hsp.delta_h > 0
        assert (hsp.delta_d, hsp.delta_p, hsp.delta_h) == (15.78, 12.18, 13.92)

    def test_complex_molecule_uses_stefanis(self, calculator):
        ibuprofen = Molecule("CC(C)Cc1ccc(C(C)C(=O)O)cc1", 206.28, name="ibuprofen")
        assert calculator.assign(ibuprofen).method is HSPMethod.STEFANIS

    def test_simple_molecule_uses_van_krevelen(self, calculator):
        pentane = Molecule("CCCCC", 72.15, name="pentane")
        assert calculator.assign(pentane).method is HSPMethod.VAN_KREVELEN

    def test_report_frame(self, calculator, ethanol):
        df = calculator.evaluate(ethanol).to_frame()
        assert list(df.columns) == [
            "method", "deltaD", "deltaP", "deltaH", "deltaT", "molarVolume", "ra_to_reference", "rank",
        ]
        assert len(df) == 3
        assert list(df["rank"]) == [1, 2, 3]
        assert df.iloc[0]["method"] == "Stefanis"

    def test_report_frame_without_reference(self, calculator):
        df = calculator.evaluate(Molecule("CCCCC", 72.15, name="pentane")).to_frame()
        assert df["ra_to_reference"].isna().all()

    def test_selection_is_logged_without_level_prefix(self, calculator, caplog):
        with caplog.at_level(logging.INFO, logger="hsp_predictor"):
            calculator.evaluate(Molecule("CCCCC", 72.15, name="pentane"))
        messages = [r.getMessage() for r in caplog.records if r.name == "hsp_predictor.selector"]
        assert messages == ["pentane: no reference, selected VanKrevelen"]


class TestExplicitMethods:

    def test_calculate_does_not_mutate(self, calculator, ethanol):
        calculator.calculate(ethanol, HSPMethod.STEFANIS)
        assert ethanol.hsp is None

    def test_switch_overwrites_wholesale(self, calculator, ethanol):
        vkh = calculator.assign(ethanol, HSPMethod.VAN_KREVELEN)
        assert vkh.method is HSPMethod.VAN_KREVELEN
        assert vkh.delta_d == pytest.approx(16.28)

        stefanis = calculator.assign(ethanol, "Stefanis")
        assert ethanol.hsp is stefanis
        assert stefanis.method is HSPMethod.STEFANIS
        assert stefanis.delta_d == pytest.approx(15.80)
        assert stefanis.molar_volume == pytest.approx(59.6)

    def test_manual_keeps_current_values(self, calculator, ethanol):
        calculator.assign(ethanol, HSPMethod.STEFANIS)
        before = ethanol.hsp
        manual = calculator.assign(ethanol, HSPMethod.MANUAL)
        assert manual.method is HSPMethod.MANUAL
        assert (manual.delta_d, manual.delta_p, manual.delta_h) == (before.delta_d, before.delta_p, before.delta_h)

    def test_manual_without_values(self, calculator):
        mol = Molecule("CCCC", 58.12, name="butane")
        assert calculator.assign(mol, HSPMethod.MANUAL) == HSPResult.placeholder()

    def test_costas_label_means_eos(self, calculator, ethanol):
        assert calculator.calculate(ethanol, "Costas").method is HSPMethod.EOS

    def test_eos_follows_configured_temperature(self, ethanol):
        warm = HSPCalculator(config=update_config(default_config(), {"methods.temperature_k": 348.15}))
        vkh = warm.calculate(ethanol, HSPMethod.VAN_KREVELEN)
        eos = warm.calculate(ethanol, HSPMethod.EOS)
        assert eos.delta_d == pytest.approx(round(vkh.delta_d * 0.965, 2))

    def test_marcus_needs_ionic_structure(self, calculator, ethanol, salt):
        assert calculator.calculate(ethanol, HSPMethod.MARCUS) is None
        assert calculator.calculate(salt, HSPMethod.MARCUS).method is HSPMethod.MARCUS

    def test_experimental_for_unknown_name(self, calculator):
        mol = Molecule("CCCCC", 72.15, name="pentane")
        assert calculator.calculate(mol, HSPMethod.EXPERIMENTAL) is None
        assert calculator.assign(mol, HSPMethod.EXPERIMENTAL).method is HSPMethod.MANUAL

    def test_unknown_label(self, calculator, ethanol):
        with pytest.raises(UnknownMethodError):
            calculator.calculate(ethanol, "Hildebrand")

    def test_set_manual(self, calculator, ethanol):
        hsp = calculator.set_manual(ethanol, 17.0, 5.0, 6.0)
        assert ethanol.hsp is hsp
        assert hsp.method is HSPMethod.MANUAL
        assert hsp.delta_t == pytest.approx((17.0**2 + 5.0**2 + 6.0**2) ** 0.5)


class TestBatchAndComparison:

    def test_assign_many_keeps_order(self, calculator):
        mols = [
            Molecule("CCO", 46.07, name="ethanol"),
            Molecule("[Na+].[Cl-]", 58.44, name="sodium chloride"),
            Molecule(None, 10.0, name="unknown"),
            Molecule("CCCCC", 72.15, name="pentane"),
        ]
        results = calculator.assign_many(mols, max_workers=4)
        assert [r.method for r in results] == [
            HSPMethod.EXPERIMENTAL, HSPMethod.MARCUS, HSPMethod.MANUAL, HSPMethod.VAN_KREVELEN,
        ]
        assert all(m.hsp is r for m, r in zip(mols, results))

    def test_assign_many_empty(self, calculator):
        assert calculator.assign_many([]) == []

    def test_miscibility_uses_configured_threshold(self, calculator):
        water = HSPResult(15.5, 16.0, 42.3, HSPMethod.EXPERIMENTAL)
        ethanol = HSPResult(15.8, 8.8, 19.4, HSPMethod.EXPERIMENTAL)
        assert not calculator.miscible(water, ethanol)
        loose = HSPCalculator(config=update_config(default_config(), {"distance.miscibility_threshold": 30.0}))
        assert loose.miscible(water, ethanol)

    def test_rank_project_molecules(self, calculator):
        water = Molecule("O", 18.02, name="water")
        others = [Molecule("CCO", 46.07, name="ethanol"), Molecule("CCCCCC", 86.18, name="hexane")]
        calculator.assign_many([water] + others)
        ranked = calculator.rank_by_distance(water, others)
        assert [m.name for m, _ in ranked] == ["ethanol", "hexane"]


class TestSelectorDirectly:

    def test_shared_fragmenter(self, calculator):
        selector = MethodSelector(calculator.fragmenter, calculator.config)
        assert selector.fragmenter is calculator.fragmenter

    def test_rank_against_reference(self):
        ref = HSPResult(16.0, 5.0, 5.0, HSPMethod.EXPERIMENTAL)
        results = {
            HSPMethod.VAN_KREVELEN: HSPResult(18.0, 5.0, 5.0, HSPMethod.VAN_KREVELEN),
            HSPMethod.STEFANIS: HSPResult(16.0, 6.0, 5.0, HSPMethod.STEFANIS),
        }
        ranking = MethodSelector.rank_against_reference(results, ref)
        assert ranking == [(HSPMethod.STEFANIS, pytest.approx(1.0)), (HSPMethod.VAN_KREVELEN, pytest.approx(4.0))]
