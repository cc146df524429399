"""
Switchboard faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  registry can raise. Codes are grouped by the pass that detects them:
  registration (21xxx), parsing (22xxx) and mandatory validation (23xxx).
- ArgumentsException: base type that carries message + options and knows how
  to render itself (rich) in a short, lowercased and actionable way.
- DefinitionConflict / ParseError / ValidationError: the three families a
  caller distinguishes. Only ValidationError is flagged as user input.
- suppress_stack() / format_details(): the display boundary. A formatted
  fault walks the whole cause chain; faults marked with suppress_stack()
  are shown without traceback since they describe misuse, not defects.
- trigger(): central entry point to surface a fault (raise, or print and exit
  in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The registry raises faults directly at the point of detection.
- Shell-mode runners call trigger(fault, **ctx) to print and exit.
"""
import sys
import traceback
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the registry (stable identifiers).

    grouping
    - registration (210xx): MISSING_NAME, DUPLICATED_NAME, MISSING_SWITCH,
      SWITCH_COLLISION, MULTIPLE_UNSWITCHED
    - parsing (220xx): UNRECOGNIZED_TOKEN, MISSING_VALUE, UNCONVERTIBLE_VALUE
    - validation (230xx): MISSING_MANDATORY
    """
    # --- registration errors (21xxx) ---
    MISSING_NAME                = 21001
    DUPLICATED_NAME             = 21002
    MISSING_SWITCH              = 21003
    SWITCH_COLLISION            = 21004
    MULTIPLE_UNSWITCHED         = 21005

    # --- parse errors (22xxx) ---
    UNRECOGNIZED_TOKEN          = 22001
    MISSING_VALUE               = 22002
    UNCONVERTIBLE_VALUE         = 22003

    # --- validation errors (23xxx) ---
    MISSING_MANDATORY           = 23001

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentsException(Exception):
    """
    base fault raised by the switchboard.

    message is the one-line summary; options carry the structured context
    (code, title, hint, argument, token, index, ...) and the display flags
    (prog, colorful, fancy, shell) merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def user_input(self):
        """
        True when the fault describes expected user misuse (not a defect).
        """
        return bool(self.options.get("user_input", False))

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "switchboard")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), styler("error-title")),
            " ]"
        )
        message = text(coalesce(self.message, ""), styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self
        console.print(self)
        if not getattr(self, "__suppress_stack__", False):
            console.print(Text(format_details(self), style="dim" if self.options.get("colorful") else ""))
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        clone = type(self)(self.message, **{**self.options, **overrides})
        clone.__cause__ = self.__cause__
        clone.__context__ = self.__context__
        clone.__suppress_context__ = self.__suppress_context__
        if getattr(self, "__suppress_stack__", False):
            suppress_stack(clone)
        return clone.with_traceback(self.__traceback__)


class DefinitionConflict(ArgumentsException):
    """
    raised by the registration pass; fatal to program startup.
    """


class MissingNameError(DefinitionConflict): ...
class DuplicatedNameError(DefinitionConflict): ...
class MissingSwitchError(DefinitionConflict): ...
class SwitchCollisionError(DefinitionConflict): ...
class MultipleUnswitchedError(DefinitionConflict): ...


class ParseError(ArgumentsException):
    """
    raised while scanning the argument vector.
    """


class UnrecognizedTokenError(ParseError): ...
class MissingValueError(ParseError): ...
class UnconvertibleValueError(ParseError): ...


class ValidationError(ArgumentsException):
    """
    raised after the scan when mandatory arguments were not supplied.
    """


class MissingMandatoryError(ValidationError): ...


def suppress_stack(exception, /):
    """
    mark an exception so format_details() omits its traceback.

    works for any exception, not only switchboard faults; returns the
    exception to allow `raise suppress_stack(error)`.
    """
    if not isinstance(exception, BaseException):
        raise TypeError("suppress_stack() argument must be an exception")
    exception.__suppress_stack__ = True
    return exception


def _details(exception):
    """
    yield the summary line and the remaining message lines of one exception.
    """
    lines = str(exception).splitlines() or [""]
    kind = type(exception)
    yield "[%s.%s] - %s" % (kind.__module__, kind.__qualname__, lines[0])
    yield from lines[1:]


def _location(exception):
    frames = traceback.extract_tb(exception.__traceback__)
    if not frames:
        return None
    frame = frames[-1]
    return "%s:%d in %s" % (frame.filename, frame.lineno, frame.name)


def format_details(exception, /, context=Unset):
    """
    render an exception and its whole cause chain as display text.

    layout (three spaces of indentation per nesting level)
    - "[module.Type] - first message line"
    - remaining message lines, indented three more spaces
    - "data[key]\\t= value" for each option of a switchboard fault
    - "@ file:line in function" for nested levels that carry a traceback
    - the traceback of the outermost exception, unless any level in the
      chain was marked with suppress_stack()

    nesting follows __cause__, then __context__ (unless suppressed).
    """
    if not isinstance(exception, BaseException):
        raise TypeError("format_details() argument must be an exception")

    buffer = [coalesce(context, "")]
    show = True
    seen = set()
    level = 0
    current = exception
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        indent = " " * 3 * level

        details = _details(current)
        buffer.append(indent + next(details) + "\n")
        for line in details:
            buffer.append("   %s%s\n" % (indent, line))
        for key, value in getattr(current, "options", {}).items():
            buffer.append("      %sdata[%s]\t= %s\n" % (indent, key, value))
        if getattr(current, "__suppress_stack__", False):
            buffer.append("      %sdata[suppress-stack]\t= True\n" % indent)
            show = False
        if level > 0 and (location := _location(current)):
            buffer.append("      @ %s\n" % location)

        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
        level += 1

    if show and exception.__traceback__ is not None:
        buffer.append("".join(traceback.format_tb(exception.__traceback__)))

    return "".join(buffer)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentsException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is printed to stderr and the process exits with
      status 1; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentsException",
    "DefinitionConflict",
    "MissingNameError",
    "DuplicatedNameError",
    "MissingSwitchError",
    "SwitchCollisionError",
    "MultipleUnswitchedError",
    "ParseError",
    "UnrecognizedTokenError",
    "MissingValueError",
    "UnconvertibleValueError",
    "ValidationError",
    "MissingMandatoryError",
    "FaultCode",
    "suppress_stack",
    "format_details",
    "trigger",
    "getdoc",
)
