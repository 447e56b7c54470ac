"""
game.py

A single, non-interactive Mastermind game used to replay strategies.

- The key is fixed at reset (or drawn from the code space with a seeded RNG)
- Each step scores one guess and narrows the consistent set
- play_out() drives a strategy until the key is found
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from mastermind.codes import CodeSpace
from mastermind.errors import EmptyDomainError, NoProgressError
from mastermind.feedback import Feedback, correct_feedback, feedback, filter_candidates
from mastermind.strategy import Strategy


class MastermindGame:
    """
    Mastermind game over a CodeSpace.

    API
    ---
    reset(key: Optional[str] = None) -> None
        Starts a new game. A random key from the space is drawn when `key` is None.

    step(guess: str) -> Feedback
        Scores a guess against the key and prunes the consistent set.

    Guesses outside the code space are accepted when `allow_inconsistent` is
    True (the default); otherwise only currently consistent codes may be guessed.
    """

    def __init__(
        self,
        space: CodeSpace,
        *,
        max_guesses: Optional[int] = None,
        allow_inconsistent: bool = True,
        seed: Optional[int] = None,
    ) -> None:
        if not isinstance(space, CodeSpace):
            raise TypeError("space must be a CodeSpace")
        if max_guesses is not None and max_guesses <= 0:
            raise ValueError("max_guesses must be positive")

        self.space = space
        self.max_guesses = max_guesses
        self.allow_inconsistent = bool(allow_inconsistent)
        self._rng = random.Random(seed)
        self._correct = correct_feedback(space.config.length)

        # Game state
        self._key: Optional[str] = None
        self._history: List[Tuple[str, Feedback]] = []
        self._candidates: List[str] = []
        self._solved = False

    def reset(self, key: Optional[str] = None) -> None:
        """Start a new game."""
        if key is None:
            key = self.space.code_at(self._rng.randrange(len(self.space)))
        elif not self.space.contains(key):
            raise KeyError(f"key {key!r} is not in the code space")
        self._key = key
        self._history = []
        self._candidates = self.space.codes()
        self._solved = False

    def step(self, guess: str) -> Feedback:
        """
        Submit a guess and receive feedback.

        Raises
        ------
        RuntimeError
            If no game is running or the game is already over.
        InvalidCodeError
            If the guess does not fit the space's configuration.
        ValueError
            If the guess is not consistent and inconsistent guesses are disallowed.
        """
        if self._key is None:
            raise RuntimeError("Call reset() before guessing")
        if self.game_over():
            raise RuntimeError("Game is already over")
        self.space.config.validate_code(guess)
        if not self.allow_inconsistent and guess not in self._candidates:
            raise ValueError(f"{guess!r} is not consistent with the feedback so far")

        fb = feedback(guess, self._key)
        self._history.append((guess, fb))
        self._candidates = filter_candidates(self._candidates, [(guess, fb)])
        if fb == self._correct:
            self._solved = True
        return fb

    def game_over(self) -> bool:
        if self._solved:
            return True
        return self.max_guesses is not None and len(self._history) >= self.max_guesses

    @property
    def solved(self) -> bool:
        return self._solved

    @property
    def history(self) -> List[Tuple[str, Feedback]]:
        return list(self._history)

    @property
    def candidates(self) -> List[str]:
        return list(self._candidates)

    @property
    def remaining_candidates(self) -> int:
        return len(self._candidates)


def play_out(
    strategy: Strategy,
    space: CodeSpace,
    key: str,
    *,
    max_guesses: Optional[int] = None,
) -> List[str]:
    """Let `strategy` play against `key` and return its guesses, the last being the key
    (unless `max_guesses` ran out first)."""
    game = MastermindGame(space, max_guesses=max_guesses)
    game.reset(key)
    guesses: List[str] = []
    while not game.game_over():
        if not game.remaining_candidates:
            raise EmptyDomainError("no consistent codes remain")
        before = game.remaining_candidates
        guess = strategy(game.candidates)
        game.step(guess)
        guesses.append(guess)
        if not game.solved and game.remaining_candidates == before:
            raise NoProgressError(f"guess {guess!r} did not narrow {before} consistent codes")
    return guesses
