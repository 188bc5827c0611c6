"""Fuzzy matching of store entries against search input."""

from .manifest import StoreEntry

__all__ = [
    "fuzzy_match",
    "search_konf",
]


def fuzzy_match(term: str, target: str) -> bool:
    """Check if term is an in-order subsequence of target.

    All characters of term must appear in target in the same order, though
    they do not need to be adjacent, and case is ignored. An empty term matches
    any target. The result is a plain yes or no: there is no similarity score
    and no ranking, so the prompt keeps the store order of the matches.
    """
    chars = iter(target.casefold())
    return all(c in chars for c in term.casefold())


def search_konf(term: str, entry: StoreEntry) -> bool:
    """Check if the search term matches a store entry.

    There is no weight on any of the fields, so they are combined into a single
    string and a match may span multiple fields.
    """
    return fuzzy_match(term, f"{entry.context} {entry.cluster} {entry.file}")
