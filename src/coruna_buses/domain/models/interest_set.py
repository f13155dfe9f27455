"""Interest set domain model."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from coruna_buses.domain.models.line_meta import LineMeta


def normalize_tokens(tokens: Iterable[str]) -> frozenset[str]:
    """Trim and lowercase interest tokens, dropping blank ones."""
    return frozenset(t.strip().lower() for t in tokens if t and t.strip())


@dataclass(frozen=True)
class InterestSet:
    """Line ids the deployment cares about.

    An empty set is the "unfiltered" sentinel: every line passes. It is never
    a filter that rejects everything.
    """

    line_ids: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def resolve(cls, lines: Mapping[int, LineMeta], tokens: Iterable[str]) -> InterestSet:
        """Resolve configured tokens (line ids or display names) against known lines.

        Args:
            lines: Line metadata keyed by line id.
            tokens: Configured interest tokens, compared case-insensitively.

        Returns:
            The set of matching line ids, or the unfiltered sentinel when no
            tokens are configured.
        """
        wanted = normalize_tokens(tokens)
        if not wanted:
            return cls()
        return cls(
            frozenset(
                line_id
                for line_id, meta in lines.items()
                if str(line_id) in wanted or meta.name_lower in wanted
            )
        )

    @property
    def is_unfiltered(self) -> bool:
        return not self.line_ids

    def __contains__(self, line_id: object) -> bool:
        return line_id in self.line_ids

    def filter_lines(self, lines: Iterable[int]) -> tuple[int, ...]:
        """Keep only the line ids of interest, preserving order."""
        if self.is_unfiltered:
            return tuple(lines)
        return tuple(line_id for line_id in lines if line_id in self.line_ids)
