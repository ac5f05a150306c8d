# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Character whitelists used to decide which keystrokes may enter the hint buffer."""
from __future__ import annotations

import string
import typing
import unicodedata

if typing.TYPE_CHECKING:
    from ..device.hwtypes import AnnotatedKeyEvent


def _letters(first: int, last: int) -> frozenset[str]:
    return frozenset(c for c in map(chr, range(first, last + 1)) if unicodedata.category(c) in ("Lu", "Ll"))


# Accented letters that national layouts put directly on a key (é on AZERTY, ñ on
# Spanish layouts, and so on). Latin-1 Supplement and Latin Extended-A.
VALID_SYMBOLS = _letters(0x00C0, 0x00FF) | _letters(0x0100, 0x017F)

# Everything a word lookup can use: the accented letters above, plain ASCII letters,
# and the Latin Extended-B letters that only come out of compose sequences.
VALID_CHARACTERS = VALID_SYMBOLS | frozenset(string.ascii_letters) | _letters(0x0180, 0x024F)

PRINTABLE_ASCII = frozenset(map(chr, range(0x20, 0x7F)))


def is_valid_symbol(event: AnnotatedKeyEvent) -> bool:
    if event.has_command_modifier:
        return False
    return event.character in VALID_SYMBOLS


def is_valid_character(char: typing.Optional[str]) -> bool:
    if not char or char == "\0":
        return False
    return char in VALID_CHARACTERS


def is_simple(event: AnnotatedKeyEvent) -> bool:
    if event.has_command_modifier:
        return False
    return event.character in PRINTABLE_ASCII


def is_letter(event: AnnotatedKeyEvent) -> bool:
    return is_simple(event) and event.character in string.ascii_letters
