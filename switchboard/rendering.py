"""
Help rendering for a switchboard.

render(board) lays the registered definitions out as a fixed-column table:

    report

    The following switches are accepted:
    (All switches are case-insensitive)
    (Valid forms: (short) /X or -X
                  (long)  /XRay or --XRay )

      Short  Long         Description
      -----  ----         -----------
        o   out           The output file
                          (default:out.txt)
        ?   help          Displays this help message

Rows are ordered by ascending help order; ties keep registration order.
Extra help lines and the (default:...) / (Mandatory) annotations hang under
the description column.

Palette keys (override any of them with a __styles__ mapping in __main__)
- summary, legend, column-header, column-rule
- short-switch, long-switch, description, default, mandatory
"""
import operator
from collections import defaultdict

from rich.text import Text

from .arguments import Kind

INDENT = 22
"""
column where descriptions (and their continuation lines) start.
"""


def annotations(argument, /):
    """
    yield the trailing annotations of one help row.

    - "(default:<value>)" for string/int definitions carrying a default, unless
      the default was inferred for a mandatory int (the caller must supply it).
    - "(Mandatory)" for mandatory definitions.
    """
    if argument.kind is not Kind.BOOL and argument.default is not None:
        if argument.explicit or not argument.mandatory:
            yield "default", "(default:%s)" % argument.default
    if argument.mandatory:
        yield "mandatory", "(Mandatory)"


def render(board, /, *, colorful=False):
    """
    Build the help text of 'board' as a rich Text.

    When colorful is False no style is applied, so Text.plain is the exact
    help string returned by Switchboard.gethelp().
    """
    styles = defaultdict(str, {
        "summary": "bold #FF4D94",  # magenta-pink program line
        "legend": "italic #A3A3A3",  # neutral gray legend
        "column-header": "bold #FFFFFF",
        "column-rule": "#4B5563",  # slate rule
        "short-switch": "bold #22C55E",  # green short switches
        "long-switch": "bold #00E6FF",  # cyan long switches
        "description": "#9CA3AF",  # muted gray help text
        "default": "#FFD600",  # amber defaults
        "mandatory": "bold #EF4444",  # red mandatory marker
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    lines = [
        Text(board.summary or board.name, styler("summary")),
        Text(""),
        Text("The following switches are accepted:", styler("legend")),
        Text("(All switches are %s)" % ("case-sensitive" if board.case_sensitive else "case-insensitive"), styler("legend")),
        Text("(Valid forms: (short) /X or -X", styler("legend")),
        Text("              (long)  /XRay or --XRay )", styler("legend")),
        Text(""),
        Text("  Short  Long         Description", styler("column-header")),
        Text("  -----  ----         -----------", styler("column-rule")),
    ]

    for argument in sorted(board.arguments, key=operator.attrgetter("order")):
        first, *rest = (argument.descr or "").splitlines() or [""]
        lines.append(Text.assemble(
            "  ",
            ((argument.short or "").rjust(3), styler("short-switch")),
            "   ",
            ((argument.long or "").ljust(11), styler("long-switch")),
            "   ",
            (first, styler("description")),
        ))
        for line in rest:
            lines.append(Text.assemble(" " * INDENT, (line, styler("description"))))
        for style, annotation in annotations(argument):
            lines.append(Text.assemble(" " * INDENT, (annotation, styler(style))))

    return Text("\n").join(lines)


__all__ = (
    "annotations",
    "render",
)
