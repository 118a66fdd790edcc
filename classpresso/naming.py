"""Generated class names."""

from __future__ import annotations

import hashlib
import math
from typing import Protocol, Sequence, TypeVar

# Letters first so a one-character name is always a valid CSS identifier.
ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
BASE = len(ALPHABET)


class Named(Protocol):
    hash_name: str
    normalized_key: str


NamedT = TypeVar("NamedT", bound=Named)


def min_name_length(count: int) -> int:
    """Shortest name length able to give ``count`` patterns distinct names."""
    if count <= 0:
        return 1
    return max(1, math.ceil(math.log(count + 1) / math.log(BASE)))


def generate_sequential_name(index: int, prefix: str = "cp-") -> str:
    """Map ``index`` onto the bijective base-36 sequence a..9, aa..a9, ba..

    0 -> "a", 35 -> "9", 36 -> "aa", 71 -> "a9", 72 -> "ba".
    """
    if index < 0:
        raise ValueError("Name index must be non-negative.")
    digits: list[str] = []
    n = index
    while True:
        digits.append(ALPHABET[n % BASE])
        n = n // BASE - 1
        if n < 0:
            break
    return prefix + "".join(reversed(digits))


def generate_sequential_names(count: int, prefix: str = "cp-") -> list[str]:
    return [generate_sequential_name(idx, prefix) for idx in range(max(0, count))]


def generate_hash_name(normalized_key: str, prefix: str = "cp-", length: int = 5) -> str:
    """Content-derived name, stable across runs but not length-optimal."""
    digest = hashlib.md5(normalized_key.encode("utf-8")).hexdigest()
    return prefix + digest[:length]


def resolve_collisions(candidates: Sequence[NamedT]) -> Sequence[NamedT]:
    """Give every distinct ``normalized_key`` a distinct ``hash_name``.

    A name already claimed by a different key gets a numeric suffix
    (1, 2, ...) until a free name is found. The registry only lives for this
    call. Candidates are updated in place and returned.
    """
    claimed: dict[str, str] = {}
    for candidate in candidates:
        base = candidate.hash_name
        name = base
        suffix = 0
        while name in claimed and claimed[name] != candidate.normalized_key:
            suffix += 1
            name = f"{base}{suffix}"
        candidate.hash_name = name
        claimed[name] = candidate.normalized_key
    return candidates
