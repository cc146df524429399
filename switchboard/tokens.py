"""
Token classification and switch matching.

grammar
- "/name"   matches the short or the long switch of a definition.
- "--name"  matches the long switch only.
- "-name"   matches the short switch only.
- anything else is a bare token.

prefixes are tested in that order, so "--x" is a long-switch token and never
a short switch named "-x".

matching walks the definitions in registration order and the first match
wins. the registry forbids colliding switches, so a second candidate can only
exist in a registry that skipped validation.
"""
from enum import Enum

from .utils import Unset


class Match(Enum):
    """
    which switch(es) of a definition a prefixed token is compared against.
    """
    EITHER = "/"
    LONG = "--"
    SHORT = "-"


def classify(token, /):
    """
    split a raw token into (mode, text).

    returns (None, token) for bare tokens; otherwise the mode picked by the
    prefix and the token without it ("--out" -> (Match.LONG, "out")).
    """
    for mode in Match:
        if token.startswith(mode.value):
            return mode, token[len(mode.value):]
    return None, token


def fold(text, /, sensitive=False):
    """
    comparison key of a switch text under the case mode.
    """
    return text if sensitive else text.casefold()


def _candidates(argument, mode):
    match mode:
        case Match.SHORT:
            switches = (argument._short,)
        case Match.LONG:
            switches = (argument._long,)
        case Match.EITHER:
            switches = (argument._short, argument._long)
    return (switch for switch in switches if switch is not Unset)


def match(arguments, token, /, sensitive=False):
    """
    return the first definition whose relevant switch equals the token.

    bare tokens and unknown switches yield None.
    """
    mode, text = classify(token)
    if mode is None:
        return None
    key = fold(text, sensitive)
    for argument in arguments:
        if any(fold(switch, sensitive) == key for switch in _candidates(argument, mode)):
            return argument
    return None


def collision(argument, others, /, sensitive=False):
    """
    find the first (other, switch) pair where one of the switches of
    'argument' equals any switch (short or long) of a definition in 'others'.

    returns None when every switch is free.
    """
    keys = {fold(switch, sensitive): switch for switch in argument.switches}
    for other in others:
        for switch in other.switches:
            if fold(switch, sensitive) in keys:
                return other, keys[fold(switch, sensitive)]
    return None


__all__ = (
    "Match",
    "classify",
    "fold",
    "match",
    "collision",
)
