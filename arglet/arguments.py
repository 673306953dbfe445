r"""
arglet argument classifier.

Overview
- Arguments: classify an argument vector into flags, parameters and positional
  arguments in a single left-to-right pass, then answer queries about it.

Conventions (GNU-like, with deviations)
- Options start with '-'. A single dash introduces one or more one-letter
  options ('-abc' is '-a -b -c'); a double dash introduces a long option
  ('--name').
- An option and its value are always separate tokens: '-ofoo' is read as
  '-o -f -o -o', never as '-o foo'.
- Long options accept '--name=value' and '--name value'. Any token holding
  '=' is self-contained: the part before the first '=' is the option, the
  rest is its value, and it never claims the next token.
- In a bundle only the last letter may claim the next token: in
  '-vo output.txt' the value belongs to '-o'.
- '--' ends option processing; everything after it is positional.
- '-' alone is an ordinary positional (stdin/stdout placeholder).
- Options may appear anywhere and any number of times.

Ambiguity and disambiguation
- The classifier cannot know whether 'file.txt' in 'prog -q file.txt' is the
  value of '-q' or a positional argument. It records it as both: the value of
  '-q' and a positional candidate owned by '-q'.
- confirm_as_parameter('-q') (alias mark_parameter) tells the classifier '-q'
  takes a value, dropping every positional candidate owned by it.
- get_parameter('-q') confirms '-q' as a side effect before returning its
  value, so positional indices may shift after it. Query parameters first,
  positionals second.

Sentinels
- Absent parameters and out-of-range positionals read as "". Use the
  'parameters' view ('-o' in args.parameters) when an empty value must be told
  apart from a missing one.

Example
    >>> args = Arguments(["prog", "-vo", "out.txt", "in.txt"])
    >>> args["-v"], args("-o"), args[1]
    (1, 'out.txt', 'in.txt')
"""
import logging
import shlex
import sys
from collections import Counter, defaultdict
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .positionals import Positional
from .utils import *

_logger = logging.getLogger(__name__)


def _tokenize(argv, /):
    """
    normalize the constructor input into a list of tokens.

    - Unset: sys.argv (program name included).
    - str: shell-like command line, split with shlex.split.
    - Iterable[str]: taken verbatim (empty tokens are kept here and skipped by the parser).
    """
    if argv is Unset:
        return list(sys.argv)
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("Arguments() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("Arguments() argument must be a string or an iterable of strings")


def _names(function, name, names, /):
    """collect and validate the flag names given to a query."""
    names = (name, *names)
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{function}() arguments must be strings")
    return names


class Arguments:
    """
    Classified view over one argument vector.

    Parameters
    - argv: Unset | str | Iterable[str] (positional-only)
      • Unset: read sys.argv.
      • str: shell-like string, split with shlex.split.
      • Iterable[str]: the tokens as they are.
    - program: bool (keyword-only, default True)
      Whether the first token (the program name) takes part in the parse. When
      True it usually ends up as positional 0.

    Views (fresh copies on every access)
    - tokens: list[str], the tokens that were parsed.
    - flags: set[str], every flag seen.
    - parameters: dict[str, str], flag -> value (last one wins).
    - positionals: list[Positional], remaining positional candidates, in order.
    """
    tokens = mirror("tokens")
    flags = mirror("flags")
    parameters = mirror("parameters")
    positionals = mirror("positionals")

    def __init__(self, argv=Unset, /, *, program=True):
        if not isinstance(program, bool):
            raise TypeError("Arguments() 'program' must be a boolean")

        tokens = _tokenize(argv)
        if not program:
            tokens = tokens[1:]

        self._tokens = tokens
        self._flags = set()
        self._counts = Counter()
        self._parameters = {}
        self._positionals = []

        self._parse(tokens)

        _logger.debug(
            "classified %d tokens: %d flags, %d parameters, %d positionals",
            len(tokens), len(self._flags), len(self._parameters), len(self._positionals),
        )

    def _record(self, flag):
        self._flags.add(flag)
        self._counts[flag] += 1

    def _parse_flag(self, token):
        """
        record one option token and return the flag now awaiting a value (or None).

        - '--name=value' / '-n=value': self-contained, nothing awaits a value.
        - '--name': the long flag awaits a value.
        - '-abc': every letter is a flag, only '-c' awaits a value.
        """
        key, separator, value = token.partition("=")
        if separator:
            self._record(key)
            self._parameters[key] = value
            return None

        if token.startswith("--"):
            self._record(token)
            return token

        for letter in token[1:]:
            self._record(flag := "-" + letter)
        return flag

    def _parse(self, tokens):
        cursor = None  # flag awaiting a value
        terminated = False  # '--' seen, sticky

        for token in tokens:
            if not token:
                continue

            if terminated:
                self._positionals.append(Positional(token))
                continue

            match token:
                case "-":
                    self._positionals.append(Positional(token))
                    cursor = None
                case "--":
                    terminated = True
                    cursor = None
                case _ if token.startswith("-"):
                    cursor = self._parse_flag(token)
                case _:
                    if cursor is not None:
                        self._parameters[cursor] = token
                    self._positionals.append(Positional(token, cursor))
                    cursor = None

    def confirm_as_parameter(self, name, /, *names):
        """
        declare the given flags as value-taking parameters.

        Every positional candidate owned by one of the flags is removed, so
        later positional indices shift down. Names without candidates are
        ignored; calling it again is a no-op.
        """
        names = set(_names("confirm_as_parameter", name, names))

        before = len(self._positionals)
        self._positionals[:] = [
            positional for positional in self._positionals if positional.owner not in names
        ]

        if removed := before - len(self._positionals):
            _logger.debug("confirmed %s as parameters, dropped %d positionals", sorted(names), removed)

    mark_parameter = confirm_as_parameter

    def has_flag(self, name, /, *names):
        """return whether any of the given flags was seen."""
        return any(name in self._flags for name in _names("has_flag", name, names))

    def occurrences(self, name, /, *names):
        """return how many times the given flags were seen in total ('-vv' counts '-v' twice)."""
        return sum(self._counts[name] for name in _names("occurrences", name, names))

    def get_parameter(self, name, /, *names):
        """
        return the value of the first given flag that has one, else "".

        All given flags are confirmed as parameters first (see
        confirm_as_parameter), which removes their candidates from the
        positional arguments.
        """
        names = _names("get_parameter", name, names)
        self.confirm_as_parameter(*names)
        for name in names:
            if name in self._parameters:
                return self._parameters[name]
        return ""

    def get_positional(self, index, /):
        """return the positional argument at index, or "" when out of range."""
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("get_positional() argument must be an integer")
        if 0 <= index < len(self._positionals):
            return self._positionals[index].value
        return ""

    def count(self):
        """return the current number of positional arguments."""
        return len(self._positionals)

    def __getitem__(self, key, /):
        match key:
            case bool():
                raise TypeError("Arguments indices must be integers or strings, not bool")
            case int():
                return self.get_positional(key)
            case str():
                return self.occurrences(key)
            case _:
                raise TypeError(f"Arguments indices must be integers or strings, not {type(key).__name__}")

    def __call__(self, name, /, *names):
        return self.get_parameter(name, *names)

    def __contains__(self, name, /):
        return self.has_flag(name)

    def __len__(self):
        return self.count()

    def __iter__(self):
        return iter([positional.value for positional in self._positionals])

    def __repr__(self):
        return "arguments(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        # flags in first-seen order
        yield "flags", list(self._counts)
        yield "parameters", dict(self._parameters)
        yield "positionals", list(self._positionals)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "flag": "bold #00E5FF",  # neon cyan flags
            "parameter": "bold #FF4DA6",  # pinky parameters
            "value": "#C8C8D0",  # soft gray values
            "positional": "#9CE19C",  # gentle green positionals
            "owner": "italic #9CE19C dim",  # tentative owners
        } | getattr(main, "__styles__", {}))

        table = Table("kind", "token", "detail", title="arguments", title_justify="left", box=ROUNDED)

        for flag, count in self._counts.items():
            if flag in self._parameters:
                detail = Text.assemble("= ", (self._parameters[flag], styles["value"]))
                table.add_row(Text("parameter", styles["parameter"]), Text(flag, styles["flag"]), detail)
            else:
                detail = Text("× %d" % count, styles["value"]) if count > 1 else Text("")
                table.add_row(Text("flag", styles["flag"]), Text(flag, styles["flag"]), detail)

        for positional in self._positionals:
            detail = Text("← " + positional.owner, styles["owner"]) if positional.owned() else Text("")
            table.add_row(Text("positional", styles["positional"]), Text(positional.value), detail)

        return table


__all__ = (
    "Arguments",
)
