# src/sami_parser/scanner/rules.py
from __future__ import annotations

import re
from typing import List, Tuple

# Rule kinds, in the order the scanner tries them.
START_TAG = "start_tag"
END_TAG = "end_tag"
COMMENT = "comment"
STYLE_BLOCK = "style_block"
CONTENT = "content"

# Start, end and comment are anchored on '<' so they win over the style block
# rule, which may also begin with a bare word.
START_TAG_PATTERN = re.compile(r"\s*<(\w[^>]*)>", re.ASCII)
END_TAG_PATTERN = re.compile(r"\s*</([^>]+)>")
COMMENT_PATTERN = re.compile(r"\s*<!--(.*?)-->", re.DOTALL)
STYLE_BLOCK_PATTERN = re.compile(r"\s*([#.]?\w+)\s*\{([^}]*)\}", re.ASCII)
CONTENT_PATTERN = re.compile(r"[^<>]*")

SCAN_RULES: List[Tuple[str, re.Pattern[str]]] = [
    (START_TAG, START_TAG_PATTERN),
    (END_TAG, END_TAG_PATTERN),
    (COMMENT, COMMENT_PATTERN),
    (STYLE_BLOCK, STYLE_BLOCK_PATTERN),
    (CONTENT, CONTENT_PATTERN),
]

# --- Tag micro-grammar ---

# name, then any number of `key=value` pairs. A value is a double-quoted
# string or a bare run without whitespace, quotes or '='.
_VALUE = r'(?:"[^"]*"|[^\s"=]+)'
TAG_BODY_PATTERN = re.compile(rf"(\w+)((?:\s+\w+\s*=\s*{_VALUE})*)", re.ASCII)
ATTRIBUTE_PATTERN = re.compile(r'(\w+)\s*=\s*("[^"]*"|[^\s"=]+)', re.ASCII)
QUOTED_PATTERN = re.compile(r'"([^"]*)"')
INTEGER_PATTERN = re.compile(r"\d+", re.ASCII)
END_TAG_BODY_PATTERN = re.compile(r"\w+", re.ASCII)
