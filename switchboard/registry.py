"""
Switchboard registry: define, parse and read command-line switches.

What this module provides
- Switchboard: an ordered registry of argument definitions that
  • validates each definition against the ones already registered (fail fast),
  • parses an argument vector in a single left-to-right pass,
  • stores one typed value per definition name, rebuilt on every parse,
  • renders help text and runs as a small program entry point.

- invoke(board, argv): convenience runner mirroring Switchboard.__invoke__.

Two passes, two fault families
- registration (add/check): DefinitionConflict subclasses, raised before
  anything is mutated.
- parsing (parse): ParseError subclasses while scanning, then a single
  ValidationError for missing mandatory arguments. The latter is tagged as user
  input and marked with suppress_stack() for display.

Parsing states
- idle: the next token is classified. A boolean switch records True; any other
  switch moves to awaiting; an unmatched token goes once to the unswitched
  definition, otherwise it is a ParseError.
- awaiting(argument): the next token is the argument's value, whatever it
  looks like ("--help" included).

Quick start
    from switchboard import Switchboard, invoke

    board = Switchboard(shell=True, summary="report - summarize a log file")
    board.add_bool("Verbose", "chatty output", "v", "verbose")
    board.add_string("OutFile", "the output file", "o", "out", unswitched=True)
    board.add_int("Count", "how many lines", "c", "count", mandatory=True)

    if __name__ == "__main__":
        invoke(board)           # exits 0 on --help, 1 on faults
        print(board.get_string("OutFile"), board.get_int("Count"))
"""
import os.path
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import rendering, tokens
from .arguments import Argument, BoolArgument, IntArgument, Kind, StringArgument
from .faults import *
from .utils import *
from .values import Empty, coerce

PLACEHOLDER = "<no help available>"


class Switchboard:
    """
    Ordered registry of argument definitions plus the values of the last parse.

    Lifecycle
    - Built once: the constructor registers the Help and WhatIf built-ins, the
      caller registers its own definitions with add()/add_string()/add_int()/
      add_bool().
    - Parsed: parse() rebuilds the value store. Definitions cannot be added
      after the first parse; parsing again with a new vector replaces all
      values.
    - Read: board[name], lookup(name) or the typed get_string/get_int/get_bool.

    Not thread-safe: a board must be owned by a single thread.
    """

    __introspectable__ = (
        "name",
        "summary",
        "case_sensitive",
        "arguments",
        "shell",
        "fancy",
        "colorful",
    )

    name = mirror("name")
    summary = mirror("summary")
    case_sensitive = mirror("case_sensitive")
    arguments = mirror("arguments")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(
            self,
            case_sensitive=False,
            /,
            *,
            name=Unset,
            summary=Unset,
            shell=False,
            fancy=False,
            colorful=False
    ):
        """
        Construct a board with the two built-in switches registered.

        Parameters
        - case_sensitive: bool
          Compare switch texts exactly (True) or with casefold() (False).
          Argument names are always case-sensitive.
        - name: str
          Program name used in help and faults (defaults to the script name).
        - summary: str
          First line of the help text (defaults to the program name).
        - shell, fancy, colorful: bool
          Runner flags: print-and-exit on faults, panel chrome, colors.
        """
        if not isinstance(name, str | Unset):
            raise TypeError("switchboard 'name' must be a string")
        if not isinstance(summary, str | Unset):
            raise TypeError("switchboard 'summary' must be a string")

        if isinstance(summary, str):
            summary = summary.strip() or Unset

        self._case_sensitive = bool(case_sensitive)
        self._name = coalesce(name, os.path.basename(sys.argv[0]) or "switchboard")
        self._summary = summary
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

        self._arguments = []
        self._values = {}
        self._supplied = set()
        self._parsed = False

        self.add(BoolArgument("Help", "?", "help", "Displays this help message and exits", order=1000))
        self.add(BoolArgument("WhatIf", None, "WhatIf", "Shows what would occur without actually doing it", order=1001))

    # ── registration ────────────────────────────────────────────────────────

    def check(self, argument, /):
        """
        Run the registration pass for 'argument' without registering it.

        Raises the first DefinitionConflict found, in this order:
        - MissingNameError / DuplicatedNameError
        - MissingSwitchError
        - SwitchCollisionError (under the board's case mode)
        - MultipleUnswitchedError
        """
        if not isinstance(argument, Argument):
            raise TypeError("check() argument must be an argument definition")

        if not argument.name:
            raise MissingNameError(
                "argument definitions must have a non-empty name",
                title="missing name",
                code=FaultCode.MISSING_NAME,
                argument=argument,
                hint="give the definition the name used to read its value back",
                docs=getdoc(FaultCode.MISSING_NAME),
            )
        if any(other.name == argument.name for other in self._arguments):
            raise DuplicatedNameError(
                "argument name %r is already defined" % argument.name,
                title="duplicated name",
                code=FaultCode.DUPLICATED_NAME,
                argument=argument,
                hint="argument names are case-sensitive lookup keys and must be unique",
                docs=getdoc(FaultCode.DUPLICATED_NAME),
            )
        if not argument.switches:
            raise MissingSwitchError(
                "argument %r must have a short or a long switch" % argument.name,
                title="missing switch",
                code=FaultCode.MISSING_SWITCH,
                argument=argument,
                hint="set at least one of short or long",
                docs=getdoc(FaultCode.MISSING_SWITCH),
            )
        if found := tokens.collision(argument, self._arguments, sensitive=self._case_sensitive):
            other, switch = found
            raise SwitchCollisionError(
                "switch %r of argument %r collides with argument %r" % (switch, argument.name, other.name),
                title="switch collision",
                code=FaultCode.SWITCH_COLLISION,
                argument=argument,
                switch=switch,
                existing=other,
                hint="pick a switch that is not used by %s%s" % (
                    other.name,
                    "" if self._case_sensitive else " (switches are compared case-insensitively)"
                ),
                docs=getdoc(FaultCode.SWITCH_COLLISION),
            )
        if argument.unswitched and (other := next((x for x in self._arguments if x.unswitched), None)):
            raise MultipleUnswitchedError(
                "argument %r cannot also be unswitched" % argument.name,
                title="multiple unswitched",
                code=FaultCode.MULTIPLE_UNSWITCHED,
                argument=argument,
                existing=other,
                hint="%r already absorbs bare values; only one argument may" % other.name,
                docs=getdoc(FaultCode.MULTIPLE_UNSWITCHED),
            )

    def add(self, argument, /):
        """
        Register 'argument' after it passes check().

        On success the definition is completed (inferred int default, help
        placeholder) and appended; on failure nothing changes.
        """
        if self._parsed:
            raise RuntimeError("definitions cannot be added after parsing")
        self.check(argument)

        if argument.kind is Kind.BOOL:
            argument._mandatory = False
            argument._default = False
        elif argument.kind is Kind.INT and argument._default is Unset:
            argument._default = 0
            argument._inferred = True
        if argument._descr is Unset:
            argument._descr = PLACEHOLDER

        self._arguments.append(argument)
        return self

    def add_string(self, name, descr, short, long=Unset, /, default=Unset, mandatory=False, *, unswitched=False, order=0):
        """
        Build a StringArgument and register it; returns the board.
        """
        return self.add(StringArgument(
            name, short, long, descr, default=default, mandatory=mandatory, unswitched=unswitched, order=order
        ))

    def add_int(self, name, descr, short, long=Unset, /, default=Unset, mandatory=False, *, unswitched=False, order=0):
        """
        Build an IntArgument and register it; returns the board.
        """
        return self.add(IntArgument(
            name, short, long, descr, default=default, mandatory=mandatory, unswitched=unswitched, order=order
        ))

    def add_bool(self, name, descr, short, long=Unset, /, *, unswitched=False, order=0):
        """
        Build a BoolArgument and register it; returns the board.
        """
        return self.add(BoolArgument(name, short, long, descr, unswitched=unswitched, order=order))

    # ── parsing ─────────────────────────────────────────────────────────────

    def _store(self, argument, raw, /, *, token=Unset, index=Unset):
        try:
            value = coerce(argument, raw)
        except (TypeError, ValueError) as exception:
            raise UnconvertibleValueError(
                "could not convert value %r for argument %r" % (raw, argument.name),
                title="unconvertible value",
                code=FaultCode.UNCONVERTIBLE_VALUE,
                argument=argument,
                token=coalesce(token, raw),
                index=coalesce(index),
                hint="%s expects %s value" % (argument.display, "an integer" if argument.kind is Kind.INT else "a %s" % argument.kind.value),
                docs=getdoc(FaultCode.UNCONVERTIBLE_VALUE),
            ) from exception
        self._values[argument.name] = value
        return value

    def _assign(self, argument, raw, /, *, index):
        self._store(argument, raw, index=index)
        self._supplied.add(argument.name)

    def _check_mandatory(self):
        """
        Run the post-scan pass: raise MissingMandatoryError naming every
        mandatory argument that got no value in this parse and carries no
        explicit default.
        """
        missing = [
            argument for argument in self._arguments
            if argument.mandatory and not argument.explicit and argument.name not in self._supplied
        ]
        if not missing:
            return

        switches = [argument.display for argument in missing]
        error = MissingMandatoryError(
            "mandatory %s missing: %s" % (pluralize("argument", len(missing)), " ".join(switches)),
            title="missing mandatory %s" % pluralize("argument", len(missing)),
            code=FaultCode.MISSING_MANDATORY,
            arguments=tuple(argument.name for argument in missing),
            switches=tuple(switches),
            user_input=True,
            hint="use /? to see the legal command-line arguments",
            docs=getdoc(FaultCode.MISSING_MANDATORY),
        )
        raise suppress_stack(error)

    def parse(self, argv=Unset, /):
        """
        Parse 'argv' (default: sys.argv[1:]) and rebuild the value store.

        Steps
        - apply defaults of every definition carrying one;
        - scan tokens left to right (see the module docstring for the states);
        - fail when the last switch is still waiting for its value;
        - unless Help was requested, check mandatory arguments.

        Returns the board, so `board.parse(argv).get_int("Count")` reads naturally.

        Raises
        - TypeError: argv is not an iterable of strings.
        - ParseError: unknown switch or unpaired value, missing value,
          unconvertible value.
        - ValidationError: mandatory arguments missing (user input).
        """
        if argv is Unset:
            argv = sys.argv[1:]
        elif isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        argv = list(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("parse() argument must be an iterable of strings")

        self._parsed = True
        self._values = {}
        self._supplied = set()

        for argument in self._arguments:
            if argument._default is not Unset:
                self._store(argument, argument._default)

        unswitched = next((argument for argument in self._arguments if argument.unswitched), None)
        pending = None
        switch = None

        for index, token in enumerate(argv, 1):
            if pending is not None:
                self._assign(pending, token, index=index)
                pending = switch = None
                continue

            argument = tokens.match(self._arguments, token, sensitive=self._case_sensitive)

            if argument is None:
                if unswitched is None:
                    raise UnrecognizedTokenError(
                        "unrecognized switch or unpaired value %r at position %d" % (token, index),
                        title="unrecognized switch or value",
                        code=FaultCode.UNRECOGNIZED_TOKEN,
                        token=token,
                        index=index,
                        hint="use /? to see the legal command-line arguments",
                        docs=getdoc(FaultCode.UNRECOGNIZED_TOKEN),
                    )
                self._assign(unswitched, token, index=index)
                unswitched = None
            elif argument.kind is Kind.BOOL:
                self._assign(argument, True, index=index)
            else:
                pending, switch = argument, token

        if pending is not None:
            raise MissingValueError(
                "missing value for parameter %s" % switch,
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                argument=pending,
                token=switch,
                index=len(argv),
                hint="pass the value right after the switch (for example: %s <value>)" % switch,
                docs=getdoc(FaultCode.MISSING_VALUE),
            )

        if not self.help:
            self._check_mandatory()

        return self

    # ── values ──────────────────────────────────────────────────────────────

    def __getitem__(self, name):
        """
        Parsed value of 'name', or Empty when there is none.
        """
        return self._values.get(name, Empty)

    def __contains__(self, name):
        return name in self._values

    def lookup(self, name, /):
        """
        Parsed value of 'name', or None when there is none.
        """
        return self._values.get(name)

    def get_string(self, name, /):
        return self[name].as_string()

    def get_int(self, name, /):
        return self[name].as_int()

    def get_bool(self, name, /):
        return self[name].as_bool()

    @property
    def help(self):
        """
        Did the user pass /? or --help?
        """
        return self.get_bool("Help")

    @property
    def whatif(self):
        """
        Did the user pass --WhatIf?
        """
        return self.get_bool("WhatIf")

    def dump(self, console=Unset, /):
        """
        Print the parsed values, one "   --<switch>\\t<value>" line each.

        False booleans are skipped: "--verbose False" reads like a request.
        """
        console = coalesce(console, Console())
        for value in self._values.values():
            if value.kind is Kind.BOOL and not value.as_bool():
                continue
            definition = value.definition
            switch = "--" + definition.long if definition.long else "-" + definition.short
            console.print(Text("   %s\t%s" % (switch, value.as_string())))

    # ── help ────────────────────────────────────────────────────────────────

    def gethelp(self):
        """
        Help text as a plain, multi-line string.
        """
        return rendering.render(self).plain

    def showhelp(self, console=Unset, /):
        """
        Print the help text, styled when the board is colorful.
        """
        console = coalesce(console, Console())
        renderable = rendering.render(self, colorful=self.colorful)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self.name} HELP".upper(), " ", "]", style="bold #FF4D94" if self.colorful else ""),
                title_align="left",
            )
        console.print(renderable)

    # ── running ─────────────────────────────────────────────────────────────

    def __invoke__(self, argv=Unset):
        """
        Parse 'argv' as a program entry point.

        - shell boards print faults to stderr and exit with status 1, print
          help and exit with status 0 when Help was requested;
        - other boards let faults propagate and print help before returning.
        """
        try:
            self.parse(argv)
        except ArgumentsException as fault:
            if not self.shell:
                raise
            trigger(fault, prog=self.name, shell=True, fancy=self.fancy, colorful=self.colorful)

        if self.help:
            self.showhelp()
            if self.shell:
                sys.exit(0)
        return self

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)
        yield "values", dict(self._values)

    def __repr__(self):
        return "switchboard(name=%r, arguments=%r)" % (self.name, [argument.name for argument in self._arguments])


def invoke(board, argv=Unset, /):
    """
    Run 'board' (anything implementing __invoke__) with 'argv'.

    Raises
    - TypeError: when 'board' cannot be invoked.
    """
    if hasattr(board, "__invoke__") and callable(board.__invoke__):
        return board.__invoke__(argv)
    raise TypeError("invoke() first argument must implement __invoke__ method")


__all__ = (
    # Public API surface for consumers of switchboard.registry.
    # These names are re-exported from the package __init__.
    "Switchboard",
    "invoke",
)
