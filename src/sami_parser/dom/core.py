from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sami_parser.scanner.tokens import AttributeValue


class NodeBase(BaseModel):
    """
    Base data model for every node of the parsed SAMI tree.
    Fields are frozen; containers only ever grow while the builder runs.
    """
    model_config = ConfigDict(frozen=True)


class ContainerMixin:
    """Shared traversal helpers for nodes that own children."""

    def iter_elements(self, tag: Optional[str] = None) -> Iterator["ElementNode"]:
        """Yields descendant elements in document order, optionally filtered by tag name."""
        wanted = tag.upper() if tag else None
        for child in self.children:
            if isinstance(child, ElementNode):
                if wanted is None or child.tag == wanted:
                    yield child
                yield from child.iter_elements(tag)


class ElementNode(ContainerMixin, NodeBase):
    """
    A tag-originated node. `tag` is always upper case; attribute keys keep the
    spelling used in the source document.
    """
    node_type: Literal["element"] = "element"
    tag: str
    attrs: Dict[str, AttributeValue] = Field(default_factory=dict)
    children: List["Node"] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Returns True if the element has no children."""
        return not self.children

    def attr(self, name: str, default: Any = None) -> Any:
        """Looks up an attribute case-insensitively (SAMI authors write Start, START and start)."""
        if name in self.attrs:
            return self.attrs[name]
        lowered = name.lower()
        for key, value in self.attrs.items():
            if key.lower() == lowered:
                return value
        return default


class TextNode(NodeBase):
    node_type: Literal["text"] = "text"
    text: str


class CommentNode(NodeBase):
    node_type: Literal["comment"] = "comment"
    text: str


class StyleBlockNode(NodeBase):
    node_type: Literal["style_block"] = "style_block"
    selector: str
    body: str


Node = Annotated[
    Union[ElementNode, TextNode, CommentNode, StyleBlockNode],
    Field(discriminator="node_type"),
]

ElementNode.model_rebuild()


class RootNode(ContainerMixin, NodeBase):
    """
    Synthetic top-level container. Holds the document root element plus any
    comments or text that sit beside it.
    """
    node_type: Literal["root"] = "root"
    children: List[Node] = Field(default_factory=list)
