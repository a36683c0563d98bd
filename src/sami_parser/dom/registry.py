# src/sami_parser/dom/registry.py
import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from sami_parser.model import GrammarSettings

logger = logging.getLogger(__name__)


class TagDefinition(BaseModel):
    """
    Grammar flags for a single tag name. Tags without an explicit definition
    get the all-False default: nestable, non-void, allowed anywhere inside the root.
    """
    model_config = ConfigDict(frozen=True)

    tag_name: str
    is_root: bool = False
    is_body: bool = False
    is_void: bool = False
    non_nestable: bool = False
    required_ancestor: Optional[str] = None


class TagRegistry:
    """
    Central table mapping tag names to their TagDefinition.

    The tree builder asks the registry how to treat every start tag instead of
    hard-coding tag names, so the rule set can be audited and tested on its own.
    """

    def __init__(self, settings: Optional[GrammarSettings] = None):
        self.settings = settings or GrammarSettings.from_config()
        self._definitions: Dict[str, TagDefinition] = {}
        self._register_all()

    def _register_all(self) -> None:
        s = self.settings
        names = {s.root_tag, s.body_tag, s.cue_tag, *s.non_nestable_tags, *s.void_tags}
        for name in sorted(names):
            self._definitions[name] = TagDefinition(
                tag_name=name,
                is_root=name == s.root_tag,
                is_body=name == s.body_tag,
                is_void=name in s.void_tags,
                non_nestable=name in s.non_nestable_tags,
                required_ancestor=s.body_tag if name == s.cue_tag else None,
            )
        logger.debug("Tag registry loaded: %s", ", ".join(sorted(self._definitions)))

    @property
    def root_tag(self) -> str:
        return self.settings.root_tag

    @property
    def body_tag(self) -> str:
        return self.settings.body_tag

    @property
    def cue_tag(self) -> str:
        return self.settings.cue_tag

    def get(self, tag_name: str) -> TagDefinition:
        """Retrieves the definition for a tag, case-insensitively."""
        key = tag_name.upper()
        definition = self._definitions.get(key)
        if definition is None:
            return TagDefinition(tag_name=key)
        return definition
