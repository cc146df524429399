import sys

from rich.pretty import pprint

from switchboard import *

board = Switchboard(shell=True, colorful=True, summary="main - switchboard demo")
board.add_bool("Blam!", "Makes a loud noise before writing", "!", "Blam")
board.add_string("OutFile", "Where to write the report\nDefaults to standard output", "o", "outFile", unswitched=True)


def write(path):
    try:
        with open(path, "w") as stream:
            stream.write("BLAM!\n" if board.get_bool("Blam!") else "\n")
    except OSError as exception:
        raise RuntimeError("could not write the report to %r" % path) from exception


if __name__ == '__main__':
    invoke(board)
    if board.whatif:
        board.dump()
        sys.exit(0)
    if path := board.get_string("OutFile"):
        try:
            write(path)
        except RuntimeError as exception:
            print(format_details(exception, "main failed:\n"), file=sys.stderr)
            sys.exit(1)
    else:
        pprint(board)
