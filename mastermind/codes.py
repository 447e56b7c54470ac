"""
codes.py

Code-space construction for Mastermind.

A code is a fixed-length string over a finite alphabet, one character per
symbol. Codes compare with Python's native string order, which matches the
alphabet's order whenever the alphabet is written in ascending order.
"""

from __future__ import annotations

import itertools
import string
from dataclasses import dataclass
from typing import Iterable, List

import pandas as pd

from mastermind.errors import EmptyDomainError, InvalidCodeError


@dataclass(frozen=True)
class GameConfig:
    """Immutable description of a code space.

    Attributes
    ----------
    alphabet : str
        The symbols, in their fixed order. Must be non-empty without repeats.
    length : int
        Number of positions (pegs) in every code.
    """

    alphabet: str
    length: int

    def __post_init__(self) -> None:
        if not isinstance(self.alphabet, str) or not self.alphabet:
            raise InvalidCodeError("alphabet must be a non-empty string")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise InvalidCodeError(f"alphabet has repeated symbols: {self.alphabet!r}")
        if not isinstance(self.length, int) or self.length <= 0:
            raise InvalidCodeError(f"length must be a positive integer, got {self.length!r}")

    @classmethod
    def standard(cls, colors: int, length: int) -> "GameConfig":
        """Alphabet of the first `colors` uppercase letters ("ABCDEF" for 6)."""
        if not isinstance(colors, int) or not 1 <= colors <= len(string.ascii_uppercase):
            raise InvalidCodeError(f"colors must be in 1..26, got {colors!r}")
        return cls(string.ascii_uppercase[:colors], length)

    @property
    def colors(self) -> int:
        return len(self.alphabet)

    @property
    def size(self) -> int:
        """Number of codes in the full space."""
        return self.colors ** self.length

    def validate_code(self, code: str) -> str:
        """Return `code` unchanged, or raise InvalidCodeError if it does not fit."""
        if not isinstance(code, str):
            raise InvalidCodeError(f"code must be a string, got {type(code).__name__}")
        if len(code) != self.length:
            raise InvalidCodeError(f"code {code!r} has length {len(code)}, expected {self.length}")
        bad = set(code) - set(self.alphabet)
        if bad:
            raise InvalidCodeError(f"code {code!r} uses symbols outside {self.alphabet!r}: {sorted(bad)}")
        return code


def generate_code_space(alphabet: Iterable[str], length: int) -> List[str]:
    """Every code of `length` symbols over `alphabet`, in lexicographic order."""
    config = GameConfig("".join(alphabet), length)
    return ["".join(p) for p in itertools.product(config.alphabet, repeat=config.length)]


class CodeSpace:
    """An indexed, validated list of codes sharing one GameConfig."""

    def __init__(self, codes: List[str], config: GameConfig) -> None:
        if not isinstance(codes, list):
            raise TypeError("`codes` must be a list of strings")
        if not codes:
            raise EmptyDomainError("no codes provided")
        if len(set(codes)) != len(codes):
            raise ValueError("duplicate codes detected; input to CodeSpace must be deduplicated")
        for c in codes:
            config.validate_code(c)

        self.config = config
        self._codes: List[str] = list(codes)
        self._index = {c: i for i, c in enumerate(self._codes)}

    # ---------- Construction helpers ----------

    @classmethod
    def from_config(cls, config: GameConfig) -> "CodeSpace":
        """The full cartesian-product space for `config`."""
        return cls(generate_code_space(config.alphabet, config.length), config)

    @classmethod
    def from_csv(
        cls,
        path: str,
        config: GameConfig,
        column: str = "code",
        *,
        uppercase: bool = True,
        dedupe: bool = True,
    ) -> "CodeSpace":
        """
        Load a restricted code space from a CSV column.

        Rows whose value does not fit `config` (wrong length or foreign
        symbols) are skipped. With `dedupe`, the first occurrence wins.

        Raises
        ------
        FileNotFoundError, KeyError, EmptyDomainError
        """
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")

        clean: List[str] = []
        seen = set()
        for val in df[column].astype(str):
            c = val.strip()
            if uppercase:
                c = c.upper()
            try:
                config.validate_code(c)
            except InvalidCodeError:
                continue
            if dedupe:
                if c in seen:
                    continue
                seen.add(c)
            clean.append(c)

        if not clean:
            raise EmptyDomainError(f"no valid codes in {path} for {config}")
        return cls(clean, config)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self):
        return iter(self._codes)

    def codes(self) -> List[str]:
        """Return a copy of the internal code list."""
        return list(self._codes)

    def contains(self, code: str) -> bool:
        return code in self._index

    def index_of(self, code: str) -> int:
        """Return the index for `code`; raise KeyError if unknown."""
        try:
            return self._index[code]
        except KeyError:
            raise KeyError(f"unknown code: {code}") from None

    def code_at(self, idx: int) -> str:
        if idx < 0 or idx >= len(self._codes):
            raise IndexError(f"index out of range: {idx}")
        return self._codes[idx]
