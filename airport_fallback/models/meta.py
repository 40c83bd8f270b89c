from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from dateutil.parser import isoparse


@dataclass(frozen=True)
class TableMeta:
    """Metadata stored alongside the airports of a fallback table."""

    generated: str
    source: str
    source_url: str
    count: int
    coverage: Dict[str, str] = field(default_factory=dict)

    @property
    def generated_at(self) -> Optional[datetime]:
        """Generation time as an aware datetime, None if unreadable."""
        if not self.generated:
            return None
        try:
            return isoparse(self.generated)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generated': self.generated,
            'source': self.source,
            'sourceUrl': self.source_url,
            'count': self.count,
            'coverage': dict(self.coverage),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TableMeta':
        coverage = data.get('coverage')
        return cls(
            generated=data.get('generated', ''),
            source=data.get('source', ''),
            source_url=data.get('sourceUrl', ''),
            count=data.get('count', 0),
            coverage=dict(coverage) if isinstance(coverage, dict) else {},
        )
