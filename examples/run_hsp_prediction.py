import os
import sys
import argparse

from rdkit import Chem
from rdkit.Chem import Descriptors

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hsp_predictor import HSPCalculator, HSPMethod, Molecule
from hsp_predictor.logging_utils import setup_logging


def parse_args():
    parser = argparse.ArgumentParser(description='Predict Hansen solubility parameters')
    parser.add_argument('--smiles', type=str, default=None,
                        help='SMILES string of the molecule (overrides --example)')
    parser.add_argument('--name', type=str, default='',
                        help='Substance name, used for the experimental lookup')
    parser.add_argument('--example', type=str, default='ethanol',
                        help='Predefined example (ethanol, acetone, toluene, ibuprofen, nacl)')
    parser.add_argument('--method', type=str, default='Auto',
                        help='Auto, VanKrevelen, Stefanis, EoS, Marcus, Manual or Experimental')
    parser.add_argument('--target', type=str, default='water',
                        help='Predefined example used as the distance target')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML configuration file')
    parser.add_argument('--log_level', type=str, default=None,
                        help='Console log level (defaults to logging.level from the config)')

    return parser.parse_args()


def get_example_smiles(example_name):
    examples = {
        'ethanol': "CCO",
        'water': "O",
        'acetone': "CC(C)=O",
        'toluene': "Cc1ccccc1",
        'ibuprofen': "CC(C)Cc1ccc(C(C)C(=O)O)cc1",
        'caffeine': "Cn1c(=O)c2c(ncn2C)n(C)c1=O",
        'nacl': "[Na+].[Cl-]",
    }
    return examples.get(example_name.lower(), examples['ethanol'])


def make_molecule(smiles, name):
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        return None
    return Molecule(smiles=smiles, molecular_weight=Descriptors.MolWt(mol), name=name)


def print_hsp(label, hsp):
    print(f"{label}: δD={hsp.delta_d:.2f}  δP={hsp.delta_p:.2f}  δH={hsp.delta_h:.2f}  "
          f"δT={hsp.delta_t:.2f}  [{hsp.method.value}]")


def main():
    args = parse_args()

    if args.smiles:
        smiles, name = args.smiles, args.name
    else:
        smiles, name = get_example_smiles(args.example), args.name or args.example

    molecule = make_molecule(smiles, name)
    if molecule is None:
        print(f"Error: Invalid SMILES string: {smiles}")
        return

    calculator = HSPCalculator(config_path=args.config)
    setup_logging(args.log_level or calculator.config.logging.level)

    print(f"Predicting HSP for: {molecule.name or smiles} ({smiles})")
    report = calculator.evaluate(molecule)
    print("\nAll methods:")
    print(report.to_frame().to_string(index=False))

    hsp = calculator.assign(molecule, HSPMethod.from_label(args.method))
    print()
    print_hsp("Assigned", hsp)

    target = make_molecule(get_example_smiles(args.target), args.target)
    calculator.assign(target)
    ra = calculator.distance(hsp, target.hsp)
    verdict = "likely miscible" if calculator.miscible(hsp, target.hsp) else "likely immiscible"
    print_hsp(f"Target ({args.target})", target.hsp)
    print(f"Ra = {ra:.2f} → {verdict}")


if __name__ == '__main__':
    main()
