"""
Alias resolution for parameter references in free text.
"""
from typing import List, Tuple

from dashboard_assistant.services.catalogue import Catalogue


class AliasResolver:
    """
    Maps phrases in a query to canonical parameter ids.

    Aliases are scanned longest first, so "flowline pressure" is matched as a
    whole before any shorter alias gets a chance at the same text. A matched
    span is claimed and shorter aliases inside it are ignored.
    """

    def __init__(self, catalogue: Catalogue):
        self.catalogue = catalogue
        # Stable sort: equal-length aliases keep their declaration order
        self._scan_order: Tuple[Tuple[str, str], ...] = tuple(
            sorted(catalogue.aliases.items(), key=lambda item: len(item[0]), reverse=True)
        )

    def resolve(self, query: str) -> List[str]:
        """
        Return the ids of all parameters the query refers to.

        Ids are de-duplicated and ordered by where the parameter is first
        mentioned, not by the longest-first scan order used for matching. An
        empty list means nothing matched.
        """
        text = query.lower().strip()
        claimed: List[Tuple[int, int]] = []
        first_seen = {}

        for phrase, param_id in self._scan_order:
            start = text.find(phrase)
            while start != -1:
                end = start + len(phrase)
                if not _overlaps(claimed, start, end):
                    claimed.append((start, end))
                    if param_id not in first_seen or start < first_seen[param_id]:
                        first_seen[param_id] = start
                start = text.find(phrase, start + 1)

        return sorted(first_seen, key=first_seen.get)


def _overlaps(spans: List[Tuple[int, int]], start: int, end: int) -> bool:
    return any(start < s_end and s_start < end for s_start, s_end in spans)
