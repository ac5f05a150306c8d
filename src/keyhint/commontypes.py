# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum


class KeyOutcome(enum.Enum):
    CONSUMED = enum.auto()
    FORWARDED = enum.auto()

    @property
    def consumed(self):
        return self is KeyOutcome.CONSUMED


class KeyHintError(Exception):
    pass


class SettingsError(KeyHintError):
    pass
