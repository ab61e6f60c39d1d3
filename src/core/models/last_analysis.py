#!/usr/bin/env python3
"""
Persisted last-analysis record.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional
from dataclasses import dataclass

from dateutil import parser as date_parser


def _parse_datetime_safe(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    # SQLite CURRENT_TIMESTAMP is UTC without an offset
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass
class LastAnalysis:
    """The single live record holding the most recently analyzed text."""
    text: str
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'text': self.text,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'LastAnalysis':
        """Create LastAnalysis from a database row mapping."""
        return cls(
            text=row['text'],
            created_at=_parse_datetime_safe(row.get('created_at')),
            id=row.get('id')
        )
