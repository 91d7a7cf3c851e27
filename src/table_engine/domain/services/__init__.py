"""Domain services for the table engine.

Exports:
    - LikePattern: Compiled SQL LIKE pattern
    - LikeToken, TokenKind: Pattern tokens
    - tokenize, like: Tokenizer and one-shot matcher
    - GridRenderer: ASCII grid table renderer
"""

from table_engine.domain.services.grid_renderer import GridRenderer
from table_engine.domain.services.like_matcher import (
    LikePattern,
    LikeToken,
    TokenKind,
    like,
    tokenize,
)

__all__ = [
    "LikePattern",
    "LikeToken",
    "TokenKind",
    "tokenize",
    "like",
    "GridRenderer",
]
