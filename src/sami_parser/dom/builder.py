# src/sami_parser/dom/builder.py
import logging
from enum import Enum
from typing import List, Optional, Sequence, Union

from sami_parser.errors import (
    DuplicateBodyError,
    MisplacedCueError,
    MissingRootError,
    NestingDepthError,
    OrphanContentError,
    OutsideRootError,
    RootError,
    UnmatchedCloseError,
)
from sami_parser.scanner.tokens import (
    CommentToken,
    ContentToken,
    EndTagToken,
    StartTagToken,
    StyleBlockToken,
    Token,
)

from .core import CommentNode, ElementNode, RootNode, StyleBlockNode, TextNode
from .models import ParseResult
from .registry import TagRegistry

logger = logging.getLogger(__name__)

ParentNode = Union[RootNode, ElementNode]


class CloseReason(Enum):
    """Why a `_descend` frame handed control back to its caller."""
    EXHAUSTED = "exhausted"
    EXPLICIT_MATCH = "explicit_match"
    IMPLICIT_NON_NESTABLE = "implicit_non_nestable"
    ANCESTOR_PROPAGATION = "ancestor_propagation"


class _BuildState:
    """Per-call state, so one TreeBuilder can be reused and called reentrantly."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.cursor = 0
        # Open tag names, upper case. The top always belongs to the innermost frame.
        self.stack: List[str] = []
        self.body: Optional[ElementNode] = None
        self.root_seen = False

    def is_open(self, tag_name: str) -> bool:
        return tag_name in self.stack


class TreeBuilder:
    """
    Builder responsible for turning a SAMI token stream into a document tree.

    Implements the dialect's nesting discipline: cue-timing and paragraph tags
    close implicitly when a sibling of the same name starts, close tags for an
    ancestor unwind every frame in between, and everything except the body
    must live inside the root element.
    """

    def __init__(self, registry: Optional[TagRegistry] = None):
        self.registry = registry or TagRegistry()

    def build(self, tokens: Sequence[Token]) -> ParseResult:
        """
        Builds the tree for a full token stream.

        Args:
            tokens (Sequence[Token]): Tokens in document order, as produced by the scanner.

        Returns:
            ParseResult: The synthetic root node plus a handle to the BODY element.

        Raises:
            GrammarError: One of its subclasses when the stream violates the grammar.
        """
        state = _BuildState(tokens)
        tree = RootNode()
        try:
            self._descend(state, tree)
        except RecursionError as exc:
            raise NestingDepthError(
                f"Parse error: elements nest too deeply ({len(state.stack)} open tags).",
                state.stack[-1] if state.stack else None,
            ) from exc

        root_tag = self.registry.root_tag
        if not any(isinstance(node, ElementNode) and node.tag == root_tag for node in tree.children):
            raise MissingRootError(f"Could not parse tokens: cannot find the root of {root_tag}.", root_tag)

        logger.debug("Built tree from %d tokens (body present: %s).", len(tokens), state.body is not None)
        return ParseResult(root=tree, body=state.body, cue_tag=self.registry.cue_tag)

    def _descend(self, state: _BuildState, parent: ParentNode) -> CloseReason:
        """Consumes tokens into `parent` until a close reason hands control back."""
        while state.cursor < len(state.tokens):
            token = state.tokens[state.cursor]
            if isinstance(token, StartTagToken):
                reason = self._on_start_tag(state, parent, token)
            elif isinstance(token, EndTagToken):
                reason = self._on_end_tag(state, parent, token)
            else:
                reason = self._on_leaf(state, parent, token)
            if reason is not None:
                return reason
        return CloseReason.EXHAUSTED

    def _on_start_tag(
            self, state: _BuildState, parent: ParentNode, token: StartTagToken
    ) -> Optional[CloseReason]:
        definition = self.registry.get(token.name)
        name = definition.tag_name

        if definition.is_root:
            if state.stack:
                raise RootError(f"Parse error: the root node is not {name}.", name)
            if state.root_seen:
                raise RootError(f"Parse error: more than one {name} tag.", name)
        elif definition.is_body:
            if state.body is not None:
                raise DuplicateBodyError(f"Parse error: more than one {name} tag inside the root.", name)
        elif definition.non_nestable and state.is_open(name):
            # Same tag already open: the previous block was never closed, so this
            # one is its sibling. Close the current frame and let the caller
            # re-read the token.
            logger.debug("Implicitly closing <%s> before a new <%s>.", state.stack[-1], name)
            state.stack.pop()
            return CloseReason.IMPLICIT_NON_NESTABLE
        elif not state.is_open(self.registry.root_tag):
            raise OutsideRootError(
                f"Parse error: '{name}' tag is outside of the {self.registry.root_tag} tag.", name
            )
        elif definition.required_ancestor and not state.is_open(definition.required_ancestor):
            raise MisplacedCueError(
                f"Parse error: '{name}' tag is outside of the {definition.required_ancestor} tag.", name
            )

        node = ElementNode(tag=name, attrs=dict(token.attributes))
        parent.children.append(node)
        state.cursor += 1

        if definition.is_root:
            state.root_seen = True
        if definition.is_body:
            state.body = node

        if not definition.is_void:
            state.stack.append(name)
            self._descend(state, node)
        return None

    def _on_end_tag(
            self, state: _BuildState, parent: ParentNode, token: EndTagToken
    ) -> Optional[CloseReason]:
        name = token.name
        if not state.is_open(name):
            raise UnmatchedCloseError(f"Parse error: close tag detected that was never open: '{name}'.", name)

        if not isinstance(parent, ElementNode) or parent.tag != name:
            # The close belongs to an ancestor: unwind this frame, keep the token.
            state.stack.pop()
            return CloseReason.ANCESTOR_PROPAGATION

        state.cursor += 1
        state.stack.pop()
        return CloseReason.EXPLICIT_MATCH

    def _on_leaf(self, state: _BuildState, parent: Optional[ParentNode], token: Token) -> Optional[CloseReason]:
        if parent is None:
            raise OrphanContentError("Parse error: content outside the root node.")

        if isinstance(token, ContentToken):
            parent.children.append(TextNode(text=token.text))
        elif isinstance(token, CommentToken):
            parent.children.append(CommentNode(text=token.text))
        elif isinstance(token, StyleBlockToken):
            parent.children.append(StyleBlockNode(selector=token.selector, body=token.body))
        else:
            raise TypeError(f"Unknown token type: {type(token).__name__}")
        state.cursor += 1
        return None
