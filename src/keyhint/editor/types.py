# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Contracts for the collaborators the hint engine talks to.

The engine never renders anything or looks up words itself. It calls out to:

* a `HintProvider`, which knows which languages have a dictionary and can list
  completions for a prefix;
* a `Notifier`, which shows a short fire-and-forget message to the user;
* a `Frontend`, which receives committed text and the preedit/candidate panel for
  one input session at a time.
"""
from __future__ import annotations

import collections.abc
import typing

if typing.TYPE_CHECKING:
    from .candidates import InputPanel

SessionId = collections.abc.Hashable


@typing.runtime_checkable
class HintProvider(typing.Protocol):
    def has_dictionary(self, language: str) -> bool:
        ...

    def suggest(self, language: str, text: str, max_count: int) -> list[str]:
        ...


class Notifier(typing.Protocol):
    def notify(self, category: str, title: str, message: str) -> None:
        ...


class Frontend(typing.Protocol):
    def commit_string(self, session_id: SessionId, text: str) -> None:
        ...

    def update_panel(self, session_id: SessionId, panel: InputPanel) -> None:
        ...

    def reset_panel(self, session_id: SessionId) -> None:
        ...

    def supports_preedit(self, session_id: SessionId) -> bool:
        ...
