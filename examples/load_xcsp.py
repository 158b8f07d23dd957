import argparse
import lzma
from pathlib import Path

from xcsp3_model.builder import InstanceBuilder


def main() -> None:
    parser = argparse.ArgumentParser(description="Load an XCSP3 instance into the model and summarize it.")
    parser.add_argument("filepath", help="Path to .xml or .xml.lzma XCSP3 file")
    parser.add_argument("--verbose", type=int, default=0, help="Verbosity level")
    args = parser.parse_args()

    from pycsp3.parser.xparser import CallbackerXCSP3, ParserXCSP3

    path = Path(args.filepath)
    if path.suffixes[-2:] == [".xml", ".lzma"]:
        with lzma.open(path, "rb") as handle:
            xml = ParserXCSP3(handle)
    else:
        xml = ParserXCSP3(str(path))

    builder = InstanceBuilder(verbose=args.verbose)
    CallbackerXCSP3(xml, builder).load_instance()
    instance = builder.build()

    print(f"{instance.format} {instance.type}")
    print(f"variables:   {len(instance.variables)}")
    print(f"constraints: {len(instance.constraints)}")
    for family in sorted({type(c).__name__ for c in instance.constraints}):
        count = sum(1 for c in instance.constraints if type(c).__name__ == family)
        print(f"  {family}: {count}")
    if instance.objectives is not None:
        for obj in instance.objectives:
            sense = "minimize" if obj.minimize else "maximize"
            print(f"objective:   {sense} {obj.type}")


if __name__ == "__main__":
    main()
