"""SQL LIKE pattern matching.

Supported wildcards:
    - ``_`` matches exactly one character
    - ``%`` matches a run of characters
    - everything else matches itself, case-sensitively

A pattern is tokenized once into wildcard tokens and literal runs, then
evaluated bottom-up with dynamic programming over (token index, text offset)
pairs instead of naive backtracking.

Boundary behavior of ``%``:
    A ``%`` that is the last token accepts whatever text remains, but only
    when some text remains: an exhausted text matches only an exhausted
    pattern. A ``%`` followed by more tokens hands the rest of the pattern
    a suffix starting at offset 1 .. len(remaining) - 1, so it never
    consumes nothing and never consumes everything.

    >>> like("%s", "figs")
    True
    >>> like("%s", "s")
    False
    >>> like("abc%", "abc")
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

UNDERSCORE = "_"
PERCENT = "%"


class TokenKind(Enum):
    """Kind of a LIKE pattern token."""

    UNDERSCORE = "underscore"
    PERCENT = "percent"
    LITERAL = "literal"


@dataclass(frozen=True, slots=True)
class LikeToken:
    """A single pattern token. ``text`` is only set for literals."""

    kind: TokenKind
    text: str = ""

    def __str__(self) -> str:
        if self.kind is TokenKind.UNDERSCORE:
            return UNDERSCORE
        if self.kind is TokenKind.PERCENT:
            return PERCENT
        return self.text


def tokenize(pattern: str) -> list[LikeToken]:
    """Split a pattern into wildcard tokens and maximal literal runs.

    Example:
        >>> [str(t) for t in tokenize("%ri_x%")]
        ['%', 'ri', '_', 'x', '%']
    """
    tokens: list[LikeToken] = []
    idx = 0
    while idx < len(pattern):
        char = pattern[idx]
        if char == UNDERSCORE:
            tokens.append(LikeToken(TokenKind.UNDERSCORE))
            idx += 1
        elif char == PERCENT:
            tokens.append(LikeToken(TokenKind.PERCENT))
            idx += 1
        else:
            start = idx
            while idx < len(pattern) and pattern[idx] not in (UNDERSCORE, PERCENT):
                idx += 1
            tokens.append(LikeToken(TokenKind.LITERAL, pattern[start:idx]))
    return tokens


class LikePattern:
    """A compiled LIKE pattern.

    Example:
        >>> pattern = LikePattern("%ri%")
        >>> pattern.matches("dorian")
        True
        >>> pattern.matches("grapefruit")
        False
    """

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._tokens = tuple(tokenize(pattern))

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def tokens(self) -> tuple[LikeToken, ...]:
        return self._tokens

    def matches(self, text: str) -> bool:
        """Check whether the whole of ``text`` matches the pattern.

        ``following[offset]`` holds whether tokens ``t + 1 ..`` match
        ``text[offset:]``; rows are filled from the last token backwards,
        so the cost is O(tokens * len(text)) with no recursion.
        """
        tokens = self._tokens
        last = len(tokens)
        end = len(text)

        # Past the last token only the exhausted text matches
        following = [offset == end for offset in range(end + 1)]

        for t in range(last - 1, -1, -1):
            token = tokens[t]
            # An exhausted text never matches a pending token
            current = [False] * (end + 1)

            if token.kind is TokenKind.UNDERSCORE:
                for offset in range(end):
                    current[offset] = following[offset + 1]
            elif token.kind is TokenKind.PERCENT:
                if t == last - 1:
                    for offset in range(end):
                        current[offset] = True
                else:
                    # any(following[offset + 1 .. end - 1])
                    seen = False
                    for offset in range(end - 1, -1, -1):
                        current[offset] = seen
                        seen = seen or following[offset]
            else:
                size = len(token.text)
                for offset in range(end):
                    current[offset] = text.startswith(token.text, offset) and following[offset + size]

            following = current

        return following[0]

    def __repr__(self) -> str:
        return f"LikePattern({self._pattern!r})"


def like(pattern: str, text: str) -> bool:
    """Match ``text`` against a LIKE ``pattern`` in one call."""
    return LikePattern(pattern).matches(text)
