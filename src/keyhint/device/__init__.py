# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Keyboard event stages
# device level:
# stage 0: watch keyboard device and issue keystream, or issue pre-recorded keystream

# keystream level:
# stage 1: track modifier keydown/up and annotate keystream with current modifiers
# stage 2: convert key event + modifiers into a character, using the keymaps
# stage 3: mark the configured compose key as KEY_COMPOSE

# editor level:
# stage 4: hand each annotated event to the hint engine, which resolves compose
#          sequences, maintains the hint buffer and decides consume vs forward
