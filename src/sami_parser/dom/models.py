# src/sami_parser/dom/models.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core import ElementNode, RootNode


class ParseResult(BaseModel):
    """
    Represents a parsed SAMI document.

    `root` owns the whole tree. `body` is a lookup shortcut pointing at the
    same BODY element that lives inside `root`, or None when the document has
    no body.
    """
    model_config = ConfigDict(frozen=True)

    root: RootNode
    body: Optional[ElementNode] = None
    cue_tag: str = Field(default="SYNC", exclude=True)

    @property
    def cues(self) -> List[ElementNode]:
        """The cue-timing elements directly under the body, in document order."""
        if self.body is None:
            return []
        return [
            child for child in self.body.children
            if isinstance(child, ElementNode) and child.tag == self.cue_tag
        ]
