"""Answer accumulator — a flat mapping from field name to answer value.

Merging is unconditional: validation happens before a patch gets here.
Keys are never deleted, so the accumulator only ever grows along the path
the user takes.
"""

from typing import Mapping


def merge(existing: Mapping[str, str], patch: Mapping[str, str]) -> dict[str, str]:
    """Return ``existing`` with ``patch``'s keys overwritten.

    Neither argument is mutated.  Merging the same patch twice yields the
    same mapping as merging it once.
    """
    return {**existing, **patch}
