from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from sami_parser.errors import NoRuleMatchedError, TagSyntaxError, ZeroWidthMatchError
from sami_parser.model import ScannerSettings
from sami_parser.scanner.rules import (
    ATTRIBUTE_PATTERN,
    COMMENT,
    CONTENT,
    END_TAG,
    END_TAG_BODY_PATTERN,
    INTEGER_PATTERN,
    QUOTED_PATTERN,
    SCAN_RULES,
    START_TAG,
    STYLE_BLOCK,
    STYLE_BLOCK_PATTERN,
    TAG_BODY_PATTERN,
)
from sami_parser.scanner.tokens import (
    AttributeValue,
    CommentToken,
    ContentToken,
    EndTagToken,
    StartTagToken,
    StyleBlockToken,
    Token,
)

logger = logging.getLogger(__name__)


class ScanService:
    """
    Splits raw SAMI text into an ordered list of tokens.
    Note: This is a stateless service; the cursor lives in `tokenize`, so one
    instance can scan any number of documents.
    """

    def __init__(self, settings: Optional[ScannerSettings] = None) -> None:
        self.settings = settings or ScannerSettings.from_config()
        self._handlers: Dict[str, Callable[[re.Match[str]], Token]] = {
            START_TAG: lambda m: self.parse_start_tag(m.group(1)),
            END_TAG: lambda m: self.parse_end_tag(m.group(1)),
            COMMENT: lambda m: CommentToken(text=m.group(1)),
            STYLE_BLOCK: lambda m: self.parse_style_block(m.group(0)),
            CONTENT: lambda m: ContentToken(text=m.group(0)),
        }

    def _snippet(self, text: str) -> str:
        return text[:self.settings.snippet_length]

    def tokenize(self, text: str) -> List[Token]:
        """
        Scans the text and returns its tokens in document order.

        The text is stripped first so no content token is produced for the
        whitespace surrounding the root tag.

        Raises:
            NoRuleMatchedError: If no rule matches at the current position.
            ZeroWidthMatchError: If a rule matches without consuming input.
            TagSyntaxError: If a tag's inner text is malformed.
        """
        code = (text or "").strip()
        tokens: List[Token] = []
        pos = 0

        while pos < len(code):
            for kind, pattern in SCAN_RULES:
                match = pattern.match(code, pos)
                if match is None:
                    continue
                if match.end() == pos:
                    raise ZeroWidthMatchError(
                        "Possible infinite loop detected", self._snippet(code[pos:])
                    )
                tokens.append(self._handlers[kind](match))
                pos = match.end()
                break
            else:
                raise NoRuleMatchedError("Invalid SAMI format", self._snippet(code[pos:]))

        logger.debug("Scanned %d characters into %d tokens.", len(code), len(tokens))
        return tokens

    # -------- Tag sub-parsers --------

    def parse_start_tag(self, content: str) -> StartTagToken:
        """
        Parses the inner text of a start tag, e.g. 'SYNC Start=1000'.

        Digit runs become ints, every other value becomes a str with its
        surrounding double quotes removed.
        """
        content = content.strip()
        result = TAG_BODY_PATTERN.fullmatch(content)
        if result is None:
            raise TagSyntaxError("Invalid tag", self._snippet(content))

        attributes: Dict[str, AttributeValue] = {}
        for key, raw in ATTRIBUTE_PATTERN.findall(result.group(2) or ""):
            attributes[key] = self._resolve_value(raw)
        return StartTagToken(name=result.group(1), attributes=attributes)

    def parse_end_tag(self, content: str) -> EndTagToken:
        """Parses the inner text of an end tag, which must be a single identifier."""
        content = content.strip()
        if END_TAG_BODY_PATTERN.fullmatch(content) is None:
            raise TagSyntaxError("Invalid tag", self._snippet(content))
        return EndTagToken(name=content)

    def parse_style_block(self, content: str) -> StyleBlockToken:
        """Parses a style rule such as '#Source {color: black;}' without interpreting its body."""
        content = content.strip()
        result = STYLE_BLOCK_PATTERN.match(content)
        if result is None:
            raise TagSyntaxError("Invalid style block", self._snippet(content))
        return StyleBlockToken(selector=result.group(1), body=result.group(2))

    def _resolve_value(self, raw: str) -> AttributeValue:
        if INTEGER_PATTERN.fullmatch(raw):
            try:
                return int(raw)
            except ValueError as exc:
                # Beyond the interpreter's int conversion digit limit.
                raise TagSyntaxError("Invalid attribute value", self._snippet(raw)) from exc
        quoted = QUOTED_PATTERN.fullmatch(raw)
        return quoted.group(1) if quoted else raw
