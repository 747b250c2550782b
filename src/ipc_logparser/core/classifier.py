"""Per-file group tag, used as a suffix of block file names."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

DEFAULT_GROUP_TOKENS: dict[str, int] = {"df": 1, "fg": 2, "gh": 3, "hj": 4}


@dataclass(frozen=True, slots=True)
class GroupClassifier:
    """Tag a file by the last marker token it contains (0 when none)."""

    tokens: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_GROUP_TOKENS))

    def classify(self, lines: Iterable[str]) -> int:
        group = 0
        for line in lines:
            for token in line.split(" "):
                tag = self.tokens.get(token)
                if tag is not None:
                    group = tag
        return group
