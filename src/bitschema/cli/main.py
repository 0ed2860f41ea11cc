"""Main CLI entry point for bitschema."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file
from ..exceptions import BitschemaError


def main() -> int:
    """Main entry point for the bitschema CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="bitschema: Compact Schema-Driven Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
A schema file is a JSON list of field declarations, one object per field:

  [{"kind": "int", "name": "lives", "min": 1, "max": 5},
   {"kind": "boolean", "name": "hardcore"},
   {"kind": "bytes", "name": "note", "max": 255}]

Bytes fields are always laid out after the fixed-width fields. Encoder and
decoder must load the same file; nothing on the wire identifies the schema.

Examples:
  bitschema --analyze schema.json       Show bit widths and fixed region size
  bitschema --analyze messages.py       Same, for BaseMessage classes in a module
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Resolve a JSON schema (or a .py file of BaseMessage classes) "
        "and print each field's bit width",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"bitschema {__version__}",
    )

    args = parser.parse_args()

    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except (BitschemaError, OSError, ValueError) as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
