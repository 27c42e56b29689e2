"""
Byte Pattern Scanner

Skip-search (Horspool style) over raw image data, with wildcard bytes.

Patterns are written as space separated hex bytes, with "??" (or "?")
matching any byte:

    compile_pattern("24 50 53 31 ?? 00")
"""

import re
from typing import Iterator, List, Sequence, Union

from .types import CompiledPattern, InvalidInput, MalformedPattern, PatternToken

HEX_TOKEN = re.compile(r"^[0-9A-Fa-f]{2}$")
WILDCARD_TOKENS = ("?", "??")

PatternLike = Union[str, CompiledPattern]


def _parse_token(token: str) -> PatternToken:
    if token in WILDCARD_TOKENS:
        return PatternToken(wildcard=True)
    if not HEX_TOKEN.match(token):
        raise MalformedPattern(f"Invalid pattern token: {token!r}")
    return PatternToken(value=int(token, 16))


def _build_skip_table(tokens: Sequence[PatternToken]) -> List[int]:
    """
    Build the per-byte skip distances.

    Every byte defaults to the distance from the last wildcard to the end of
    the pattern (at least 1). Bytes of the concrete run after the last
    wildcard get the usual Horspool distance to the final position.
    """
    last_index = len(tokens) - 1
    wildcards = [i for i, t in enumerate(tokens) if t.wildcard]
    run_start = wildcards[-1] + 1 if wildcards else 0

    diff = max(last_index - (wildcards[-1] if wildcards else 0), 1)
    table = [diff] * 256

    for i in range(run_start, last_index):
        table[tokens[i].value] = last_index - i

    return table


def compile_pattern(pattern: str) -> CompiledPattern:
    """
    Compile pattern text into an immutable CompiledPattern.

    Raises:
        MalformedPattern: if the pattern is empty or a token does not parse
    """
    tokens = tuple(_parse_token(t) for t in pattern.split())
    if not tokens:
        raise MalformedPattern("Pattern is empty")

    return CompiledPattern(tokens=tokens, skip_table=tuple(_build_skip_table(tokens)))


def _scan(data: Sequence[int], pattern: CompiledPattern, offset: int) -> Iterator[int]:
    tokens = pattern.tokens
    table = pattern.skip_table
    last_index = pattern.last_index
    size = len(data)

    pos = last_index
    while pos < size:
        start = pos - last_index
        j = last_index
        while j >= 0:
            token = tokens[j]
            if not token.wildcard and token.value != data[start + j]:
                break
            j -= 1
        else:
            yield start + offset

        pos += max(1, table[data[pos]])


def iter_matches(data: Sequence[int], pattern: PatternLike, offset: int = 0) -> Iterator[int]:
    """
    Lazily yield match positions of pattern in data, ascending.

    Each position is shifted by offset before it is reported. A pattern
    longer than data yields nothing.

    Raises:
        InvalidInput: if data or pattern is empty
        MalformedPattern: if pattern text does not parse
    """
    if isinstance(pattern, str):
        if not pattern.strip():
            raise InvalidInput("Pattern is empty")
        pattern = compile_pattern(pattern)

    if len(data) == 0:
        raise InvalidInput("Data is empty")
    if len(pattern) == 0:
        raise InvalidInput("Pattern is empty")

    return _scan(data, pattern, offset)


def search_pattern(data: Sequence[int], pattern: PatternLike, offset: int = 0) -> List[int]:
    """Return every match position of pattern in data (see iter_matches)"""
    return list(iter_matches(data, pattern, offset))
