from typing import Hashable, Iterable, Tuple, TypeVar

T = TypeVar("T", bound=Hashable)


def ordered_union(*sequences: Iterable[T]) -> Tuple[T, ...]:
    """
    Union of the given sequences, treated as ordered sets.

    Keeps the first occurrence of every element, in the order the elements
    are first seen, and drops later duplicates:

        ordered_union(["a", "b"], ["c", "a"]) == ("a", "b", "c")
    """
    # dict keeps insertion order
    seen: dict = {}
    for sequence in sequences:
        for item in sequence:
            seen.setdefault(item, None)
    return tuple(seen)
