"""Shared extraction context (cross-dataset lookups)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ExtractionContext:
    # None when SpeciesAbilities.lua could not be extracted.
    species_abilities: Optional[Dict[str, List[Any]]] = None

    def abilities_for(self, *names: Optional[str]) -> Optional[List[Any]]:
        """Return the first species-ability list registered under any of `names`."""
        if not self.species_abilities:
            return None
        for name in names:
            if name is None:
                continue
            entries = self.species_abilities.get(name)
            if isinstance(entries, list) and entries:
                return entries
        return None
