# ============================================
# file: src/sami_parser/model.py
# ============================================
from __future__ import annotations

from typing import List

from pydantic import BaseModel, field_validator

from sami_parser.managers.config_manager import config_manager


class ScannerSettings(BaseModel):
    # Number of characters quoted from the input in scan error messages.
    snippet_length: int = 15

    @classmethod
    def from_config(cls) -> "ScannerSettings":
        return cls(**config_manager.get_section("scanner"))


class GrammarSettings(BaseModel):
    """
    The tag vocabulary the tree builder enforces.

    Every name is normalized to upper case so it can be compared directly with
    the canonical tag names carried by the tokens.
    """
    root_tag: str = "SAMI"
    body_tag: str = "BODY"
    cue_tag: str = "SYNC"
    non_nestable_tags: List[str] = ["SYNC", "P"]
    void_tags: List[str] = ["BR"]

    @field_validator("root_tag", "body_tag", "cue_tag")
    @classmethod
    def _upper_tag(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("non_nestable_tags", "void_tags")
    @classmethod
    def _upper_tags(cls, value: List[str]) -> List[str]:
        return [v.strip().upper() for v in value if v and v.strip()]

    @classmethod
    def from_config(cls) -> "GrammarSettings":
        """Builds the settings from the 'grammar' section of settings.json."""
        return cls(**config_manager.get_section("grammar"))
