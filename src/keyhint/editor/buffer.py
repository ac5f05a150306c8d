# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations


# The cursor is always at the end of the buffer. There is no mid-buffer editing, so
# the cursor position is simply the length, counted in code points.
class InputBuffer:
    def __init__(self, text: str = ""):
        self._chars: list[str] = list(text)

    def __len__(self):
        return len(self._chars)

    def __repr__(self):
        return f"InputBuffer({self.user_input!r})"

    @property
    def empty(self):
        return not self._chars

    @property
    def user_input(self) -> str:
        return "".join(self._chars)

    @property
    def cursor_by_char(self) -> int:
        return len(self._chars)

    @property
    def cursor_by_byte(self) -> int:
        return len(self.user_input.encode("utf-8"))

    def type(self, char: str):
        self._chars.extend(char)

    def backspace(self) -> bool:
        if not self._chars:
            # nothing to remove; the caller forwards the key instead
            return False
        self._chars.pop()
        return True

    def clear(self):
        self._chars = []
