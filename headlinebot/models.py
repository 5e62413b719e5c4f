from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Headline:
    title: str
    link: str
    published: Optional[datetime]
    image_url: Optional[str] = None
    description: Optional[str] = None
    source: str = ""


@dataclass
class Candidate:
    headline: Headline
    keywords: Tuple[str, ...]

    @property
    def title(self):
        return self.headline.title

    @property
    def link(self):
        return self.headline.link
