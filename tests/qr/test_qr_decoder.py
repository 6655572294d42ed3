from __future__ import annotations

import sys
import types
from dataclasses import dataclass

import pytest
from PIL import Image

from src.student_roster.student_roster.qr.decoder import decode_image


@dataclass
class _Symbol:
    data: bytes


@pytest.fixture
def zbar_symbols(monkeypatch):
    """Replace the zbar binding so decoding returns the given symbols."""
    symbols: list = []
    binding = types.ModuleType("pyzbar.pyzbar")
    binding.decode = lambda img: list(symbols)
    package = types.ModuleType("pyzbar")
    package.pyzbar = binding
    monkeypatch.setitem(sys.modules, "pyzbar", package)
    monkeypatch.setitem(sys.modules, "pyzbar.pyzbar", binding)
    return symbols


def _image():
    return Image.new("RGB", (8, 8), "white")


def test_decode_image_returns_first_text(zbar_symbols):
    zbar_symbols.extend([_Symbol(b"  "), _Symbol(b" doc1 "), _Symbol(b"doc2")])

    assert decode_image(_image()) == "doc1"


def test_non_utf8_symbols_are_skipped(zbar_symbols):
    zbar_symbols.extend([_Symbol(b"\xff\xfe\xfa"), _Symbol("طالب".encode("utf-8"))])

    assert decode_image(_image()) == "طالب"


def test_only_non_utf8_symbols_decode_to_nothing(zbar_symbols):
    zbar_symbols.append(_Symbol(b"\xff\xfe"))

    assert decode_image(_image()) is None
