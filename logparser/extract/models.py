"""
Extract Layer Models

Record shapes as they come from the events API and as they are stored.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Actor(BaseModel):
    """Who triggered the event"""

    model_config = ConfigDict(extra="ignore")

    login: Optional[str] = Field(None, description="Actor login name")


class Record(BaseModel):
    """A single event record"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Event identifier")
    type: str = Field(..., description="Event type (e.g., 'PushEvent')")
    actor: Actor = Field(default_factory=Actor, description="Event actor")

    def __str__(self) -> str:
        return f"Record{{id='{self.id}', type='{self.type}', actor={self.actor.login}}}"


@dataclass
class Page:
    """One response's worth of records plus the cursor for the next page"""

    records: List[Record] = field(default_factory=list)
    next_url: Optional[str] = None

    @classmethod
    def empty(cls) -> "Page":
        return cls(records=[], next_url=None)
