"""Data models for feed items and the response envelope."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FeedItem:
    """One normalized feed entry. Every field except guid is always a string."""

    title: str
    link: str
    pub_date: str
    description: str
    guid: Optional[str] = None

    def to_dict(self):
        data = {
            'title': self.title,
            'link': self.link,
            'pubDate': self.pub_date,
            'description': self.description,
        }
        if self.guid is not None:
            data['guid'] = self.guid
        return data


@dataclass
class FeedResult:
    """Response envelope: items plus an error message only when nothing was fetched."""

    items: List[FeedItem] = field(default_factory=list)
    total: int = 0
    error: Optional[str] = None

    @classmethod
    def success(cls, items):
        items = list(items)
        return cls(items=items, total=len(items))

    @classmethod
    def failure(cls, message):
        return cls(items=[], total=0, error=message)

    def to_dict(self):
        data = {
            'items': [item.to_dict() for item in self.items],
            'total': self.total,
        }
        if self.error is not None:
            data['error'] = self.error
        return data
