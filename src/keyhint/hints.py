# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import pathlib

import pygtrie

logger = logging.getLogger(__name__)


def primary_subtag(language: str) -> str:
    return language.replace("-", "_").split("_", 1)[0].lower()


class WordListHints:
    """Completions from plain word lists, one per language.

    Words are looked up case-insensitively by prefix and come back spelled as they
    appear in the list, shortest first.
    """

    def __init__(self, words_by_language: collections.abc.Mapping[str, collections.abc.Iterable[str]]):
        self._tries: dict[str, pygtrie.CharTrie] = {}
        for language, words in words_by_language.items():
            trie = pygtrie.CharTrie()
            for word in words:
                word = word.strip()
                if word:
                    trie.setdefault(word.casefold(), word)
            self._tries[language.lower()] = trie

    @classmethod
    def from_directory(cls, path: pathlib.Path):
        words_by_language = {}
        for word_file in sorted(path.glob("*.txt")):
            with word_file.open(encoding="utf-8") as f:
                words_by_language[word_file.stem] = f.read().splitlines()
            logger.debug("Loaded %d words for %s", len(words_by_language[word_file.stem]), word_file.stem)
        return cls(words_by_language)

    @property
    def languages(self):
        return sorted(self._tries)

    def _trie_for(self, language: str):
        lowered = language.lower()
        if lowered in self._tries:
            return self._tries[lowered]
        return self._tries.get(primary_subtag(language))

    def has_dictionary(self, language: str) -> bool:
        return self._trie_for(language) is not None

    def suggest(self, language: str, text: str, max_count: int) -> list[str]:
        trie = self._trie_for(language)
        prefix = text.casefold()
        if trie is None or max_count <= 0 or not trie.has_node(prefix):
            return []
        words = sorted(trie.itervalues(prefix=prefix), key=lambda w: (len(w), w))
        return words[:max_count]
