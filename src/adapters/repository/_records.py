"""Record helpers shared by the repository adapters."""

import copy

from src.domain.ports import Pie


def find_index(pies: list[Pie], pie_id: str) -> int | None:
    """Position of the pie whose id equals pie_id as text, or None."""
    for index, pie in enumerate(pies):
        if str(pie.get("id")) == pie_id:
            return index
    return None


def next_id(pies: list[Pie]) -> int:
    """
    One past the highest numeric id in use (1 for an empty collection).

    Ids are compared as text elsewhere, so "2" and 2 both count, and the
    result never equals an existing id in its text form.
    """
    taken = {str(pie.get("id")) for pie in pies}
    numeric = [int(pie_id) for pie_id in taken if pie_id.isascii() and pie_id.isdigit()]
    candidate = max(numeric, default=0) + 1
    while str(candidate) in taken:
        candidate += 1
    return candidate


def new_record(pies: list[Pie], pie: Pie) -> Pie:
    record = {key: value for key, value in copy.deepcopy(pie).items() if key != "id"}
    return {"id": next_id(pies), **record}


def merged_record(stored: Pie, changes: Pie) -> Pie:
    # The stored id always wins over one in the body
    merged = {**stored, **copy.deepcopy(changes)}
    merged["id"] = stored["id"]
    return merged
