# src/sami_parser/scanner/tokens.py
from typing import Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Raw attribute text resolves to an int (digit runs) or a str (everything else).
AttributeValue = Union[int, str]


class Token(BaseModel):
    """
    Base model for every token emitted by the scanner.
    Tokens are immutable once produced.
    """
    model_config = ConfigDict(frozen=True)


class TagToken(Token):
    """A token carrying a tag name, stored in canonical upper case."""
    name: str

    @field_validator("name")
    @classmethod
    def _canonical_name(cls, value: str) -> str:
        return value.upper()


class StartTagToken(TagToken):
    kind: Literal["start_tag"] = "start_tag"
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)


class EndTagToken(TagToken):
    kind: Literal["end_tag"] = "end_tag"


class ContentToken(Token):
    kind: Literal["content"] = "content"
    text: str


class CommentToken(Token):
    kind: Literal["comment"] = "comment"
    text: str


class StyleBlockToken(Token):
    """
    An embedded style rule such as `.ENUSCC {Name: "English Captions";}`.
    The body is an opaque payload for downstream consumers.
    """
    kind: Literal["style_block"] = "style_block"
    selector: str
    body: str
