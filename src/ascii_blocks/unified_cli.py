# unified_cli.py
import sys
import importlib
from typing import Sequence, Optional

PROG = "ascii-blocks"

COMMANDS = {
    "colorize": "ascii_blocks.colorize_ascii",
    "image": "ascii_blocks.image_to_ascii",
    "raster": "ascii_blocks.rasterize",
}


def usage(prog: str = PROG) -> None:
    cmds = ", ".join(sorted(COMMANDS))
    print(f"Usage: {prog} <command> [args...]")
    print(f"Commands: {cmds}")
    print(f"Run '{prog} <command> --help' for the options of one command.")


def run_command(cmd: str, args: Sequence[str]) -> int:
    """Import the command module and run its main(argv), mapping exits to a status."""
    module_path = COMMANDS[cmd]
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        print(f"Failed to import command '{cmd}' ({module_path}): {e}", file=sys.stderr)
        return 3

    try:
        result = module.main(list(args))
    except SystemExit as se:
        # argparse exits with an int; load_buffer exits with a message.
        if se.code is None:
            return 0
        if isinstance(se.code, int):
            return se.code
        print(se.code, file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error running command: {e}", file=sys.stderr)
        return 1
    return result if isinstance(result, int) else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if not argv or argv[0] in ("-h", "--help"):
        usage()
        return 0

    cmd, *args = argv
    if cmd not in COMMANDS:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        usage()
        return 2

    return run_command(cmd, args)


if __name__ == "__main__":
    raise SystemExit(main())
