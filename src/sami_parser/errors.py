# src/sami_parser/errors.py
from typing import Optional


class SamiError(Exception):
    """Base class for every failure raised while parsing a SAMI document."""


# --- Scanner errors ---

class ScanError(SamiError, ValueError):
    """
    Raised when the raw text cannot be split into tokens.
    `snippet` holds the beginning of the text that could not be scanned.
    """

    def __init__(self, message: str, snippet: str = ""):
        super().__init__(f"{message}: {snippet!r}" if snippet else message)
        self.snippet = snippet


class NoRuleMatchedError(ScanError):
    """No scanner rule matches at the current position."""


class ZeroWidthMatchError(ScanError):
    """A rule matched without consuming input; continuing would loop forever."""


class TagSyntaxError(ScanError):
    """The inner text of a start or end tag violates the tag micro-grammar."""


# --- Grammar errors ---

class GrammarError(SamiError, ValueError):
    """
    Raised when the token stream violates the SAMI nesting rules.
    `tag_name` holds the offending (upper-cased) tag when one is involved.
    """

    def __init__(self, message: str, tag_name: Optional[str] = None):
        super().__init__(message)
        self.tag_name = tag_name


class RootError(GrammarError):
    """The document root tag is not the outermost element."""


class DuplicateBodyError(GrammarError):
    """More than one body element."""


class OutsideRootError(GrammarError):
    """A tag appears before the document root opens or after it closes."""


class MisplacedCueError(GrammarError):
    """A cue-timing tag appears outside the body element."""


class UnmatchedCloseError(GrammarError):
    """A close tag whose start tag was never opened."""


class OrphanContentError(GrammarError):
    """A leaf token without a parent node."""


class MissingRootError(GrammarError):
    """The token stream holds no document root element."""


class NestingDepthError(GrammarError):
    """Elements nest deeper than the builder's recursion can follow."""
