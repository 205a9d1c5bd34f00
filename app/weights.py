from typing import List, Mapping, Sequence

from .models import MidConfig, WeightedMid, WeightEntry


def weight_for(mid_id: str, entries: Sequence[WeightEntry]) -> float:
    for entry in entries:
        if entry.mid_id == mid_id:
            return entry.weight
    return 0.0


def attach_weights(
    eligible: Sequence[MidConfig],
    weight_table: Mapping[str, Sequence[WeightEntry]],
    country: str,
) -> List[WeightedMid]:
    # Output keeps the order of `eligible`; SIMPLE tie-breaking depends on it.
    entries = weight_table.get(country, [])
    return [WeightedMid(mid=mid, weight=weight_for(mid.id, entries)) for mid in eligible]
