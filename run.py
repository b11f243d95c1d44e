"""Command-line entry point for the retro file conversion tool.

Example::

    python run.py -ifh inFile.hex -ofp outFile.pap
    python run.py -ifb boot.bin,A=0x200 -ifh app.hex -ofp image.pap
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from pyretrofile import __version__
from pyretrofile.errors import ConversionError, Result
from pyretrofile.system import Converter, ConverterConfig, FileType, parse_file_argument

EPILOG = """\
input file options:
  Intel HEX files accept no options.
  Raw binary files require A=ADDR, the starting address of the file, given as
  decimal, 0x-prefixed hex or $-prefixed hex.

Multiple input files are supported, and the types may be freely mixed. Only
one output file is supported.

examples:
  run.py -ifh inFile.hex -ofp outFile.pap
  run.py -ifb inFile.bin,A=0x200 -ofw outFile.wdc.bin
  run.py -ifb in1.bin,A=0x200 -ifb in2.bin,A=$8000 -ifh in3.hex -ofp out.pap
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(int(Result.INVALID_ARGUMENTS), f"{self.prog}: error: {message}\n")


class _FileAction(argparse.Action):
    """Collects ``(file type, argument)`` pairs in command-line order."""

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        items = list(getattr(namespace, self.dest, None) or [])
        items.append((self.const, values))
        setattr(namespace, self.dest, items)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="run.py",
        description="Retro file conversion utility",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    inputs = parser.add_argument_group("input files")
    inputs.add_argument(
        "-ifh",
        dest="inputs",
        action=_FileAction,
        const=FileType.HEX,
        metavar="INPUT_FILE",
        help="The input file is of type Intel HEX.",
    )
    inputs.add_argument(
        "-ifb",
        dest="inputs",
        action=_FileAction,
        const=FileType.BIN,
        metavar="INPUT_FILE,A=ADDR",
        help="The input file is of type raw binary.",
    )
    outputs = parser.add_argument_group("output file")
    outputs.add_argument(
        "-ofp",
        dest="outputs",
        action=_FileAction,
        const=FileType.PAP,
        metavar="OUTPUT_FILE",
        help="The output file is of type MOS paper tape.",
    )
    outputs.add_argument(
        "-ofw",
        dest="outputs",
        action=_FileAction,
        const=FileType.WDC,
        metavar="OUTPUT_FILE",
        help="The output file is of type WDC binary.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress messages",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ConverterConfig:
    if not args.inputs:
        parser.error("At least one input file must be specified.")
    if not args.outputs:
        parser.error("An output file must be specified.")
    if len(args.outputs) > 1:
        parser.error("Only one output file is supported.")

    inputs = [parse_file_argument(text, file_type) for file_type, text in args.inputs]
    file_type, text = args.outputs[0]
    return ConverterConfig(
        inputs=inputs,
        output=parse_file_argument(text, file_type),
        quiet=args.quiet,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help()
        return int(Result.USAGE_SHOWN)

    args = parser.parse_args(argv)
    try:
        config = build_config(args, parser)
        Converter(config).run()
    except ConversionError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return int(exc.result)
    return int(Result.OK)


if __name__ == "__main__":
    sys.exit(main())
