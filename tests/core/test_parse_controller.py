# tests/core/test_parse_controller.py
import logging
import sys

import pytest

from sami_parser.controllers.parse_controller import ParseController, parse_sami
from sami_parser.dom.builder import TreeBuilder
from sami_parser.dom.registry import TagRegistry
from sami_parser.errors import SamiError, ScanError, ZeroWidthMatchError
from sami_parser.model import GrammarSettings, ScannerSettings
from sami_parser.services.scan_service import ScanService

VALID = """
    <!-- exported captions -->
    <SAMI>
      <Title>Title of SAMI</Title>
      <Body>
        <SYNC START=1000>Hello</SYNC>
        <SYNC START=2000>World</SYNC>
      </Body>
    </SAMI>
"""
DUPLICATE_BODY = "<SAMI><BODY></BODY><BODY></BODY></SAMI>"
BAD_SCAN = "<SAMI>a > b</SAMI>"


@pytest.fixture
def controller():
    return ParseController(
        scanner=ScanService(ScannerSettings()),
        builder=TreeBuilder(TagRegistry(GrammarSettings())),
    )


def test_parse_string(controller):
    """A raw string goes through both stages."""
    result = controller.parse(VALID)
    assert result.root is not None
    assert len(result.body.children) == 2
    assert [c.attrs["START"] for c in result.cues] == [1000, 2000]


def test_parse_sami_shortcut():
    result = parse_sami(VALID)
    assert [c.children[0].text for c in result.cues] == ["Hello", "World"]


def test_scan_errors_propagate(controller):
    with pytest.raises(ZeroWidthMatchError) as exc_info:
        controller.parse(BAD_SCAN)
    assert isinstance(exc_info.value, ScanError)
    assert isinstance(exc_info.value, SamiError)
    assert isinstance(exc_info.value, ValueError)


def test_parse_many_collects_results_and_errors(controller, caplog):
    documents = {"good.smi": VALID, "dup.smi": DUPLICATE_BODY, "scan.smi": BAD_SCAN}
    with caplog.at_level(logging.WARNING, logger="sami_parser.controllers.parse_controller"):
        stats = controller.parse_many(documents, show_progress=False)

    assert stats["parsed"] == 1
    assert stats["failed"] == 2
    assert list(stats["results"]) == ["good.smi"]
    assert stats["errors"]["dup.smi"].startswith("DuplicateBodyError")
    assert stats["errors"]["scan.smi"].startswith("ZeroWidthMatchError")
    assert stats["duration_s"] >= 0
    assert "dup.smi" in caplog.text


@pytest.mark.skipif(
    not getattr(sys, "get_int_max_str_digits", lambda: 0)(),
    reason="interpreter has no int conversion digit limit",
)
def test_parse_many_reports_oversized_attribute_value(controller):
    digits = "1" * (sys.get_int_max_str_digits() + 1)
    documents = {"big.smi": f"<SAMI><BODY><SYNC Start={digits}>x</BODY></SAMI>", "ok.smi": "<SAMI></SAMI>"}
    stats = controller.parse_many(documents, show_progress=False)

    assert stats["parsed"] == 1
    assert stats["failed"] == 1
    assert list(stats["results"]) == ["ok.smi"]
    assert stats["errors"]["big.smi"].startswith("TagSyntaxError")


def test_parse_many_with_progress_bar(controller, capsys):
    stats = controller.parse_many({"a": VALID, "b": VALID}, show_progress=True)
    assert stats["parsed"] == 2
    assert "Parsing captions" in capsys.readouterr().err


def test_parse_many_empty_batch(controller):
    stats = controller.parse_many({}, show_progress=False)
    assert (stats["parsed"], stats["failed"], stats["results"], stats["errors"]) == (0, 0, {}, {})
