"""
Best-effort recovery of row handles from index values.

Index values usually embed the row id ("handle") the index entry points
to, but its position depends on the value layout version and on the
indexed columns. There is no schema here: a handful of fixed 8-byte
windows are decoded and any plausible row id is reported.

This is a guess, not a property of the format. It can miss real
handles and it can accept unrelated bytes that happen to decode to a
small positive number.
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from tabula.core.codec.integer import I64_SIZE, decode_i64

DEFAULT_UPPER_BOUND = 1_000_000_000


@dataclass(frozen=True, slots=True)
class HandleCandidate:
    offset: int
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"offset": self.offset, "value": self.value}


@dataclass(frozen=True, slots=True)
class HandleProbe:
    """
    One window to try. `offset_fn` maps the value length to the window
    offset, or None when the value is too short for this probe.
    `predicate` decides whether the decoded integer looks like a row id.

    Only the first probe landing on a given offset is evaluated; later
    probes resolving to the same offset are skipped even when their
    predicate differs.
    """
    name: str
    offset_fn: Callable[[int], int | None]
    predicate: Callable[[int], bool]


def plausible_handle(upper_bound: int = DEFAULT_UPPER_BOUND) -> Callable[[int], bool]:
    def predicate(value: int) -> bool:
        return 0 < value < upper_bound
    return predicate


def default_probes(upper_bound: int = DEFAULT_UPPER_BOUND) -> tuple[HandleProbe, ...]:
    predicate = plausible_handle(upper_bound)
    return (
        # right after the leading flag byte, the most common layout
        HandleProbe("leading", lambda n: 1 if n >= 9 else None, predicate),
        HandleProbe("trailing", lambda n: n - I64_SIZE if n >= I64_SIZE else None, predicate),
        # newer layouts with a versioned header
        HandleProbe("secondary", lambda n: 9 if n >= 17 else None, predicate),
    )


DEFAULT_PROBES = default_probes()


def find_handle_candidates(
    value: bytes,
    probes: Iterable[HandleProbe] = DEFAULT_PROBES,
) -> list[HandleCandidate]:
    """
    Return the plausible handles in probe priority order; the first one
    is the preferred guess. Each offset is probed at most once.
    """
    candidates: list[HandleCandidate] = []
    seen: set[int] = set()

    for probe in probes:
        offset = probe.offset_fn(len(value))
        if offset is None or offset in seen:
            continue
        seen.add(offset)

        if offset < 0 or offset + I64_SIZE > len(value):
            continue

        handle = decode_i64(value, offset)
        if probe.predicate(handle):
            candidates.append(HandleCandidate(offset, handle))

    return candidates
