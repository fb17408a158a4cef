"""Read text files written by legacy Hebrew tooling as well as UTF-8 editors."""

from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from mailcomposer.core.errors import DecodingError, NotFoundError

logger = logging.getLogger(__name__)

# Fixed fallback order: UTF-8, Hebrew DOS (IBM-862), Hebrew Windows (1255).
DEFAULT_ENCODINGS: tuple[str, ...] = ("utf-8", "cp862", "cp1255")

_HEBREW = re.compile("[\u0590-\u05FF]")
_LINE_BREAK = re.compile(r"\r?\n")

PathLike = Union[str, Path]


@dataclass(frozen=True)
class DecodedText:
    text: str
    encoding: str

    @property
    def is_legacy(self) -> bool:
        """True when the text came from an 8-bit code page stored in visual order."""
        return codecs.lookup(self.encoding).name != "utf-8"


def contains_hebrew(text: str) -> bool:
    return _HEBREW.search(text) is not None


def correct_bidi(text: str) -> str:
    """Reverse every line that contains Hebrew characters.

    Legacy DOS and Windows files keep right-to-left runs in visual order, so
    a whole-line reversal restores logical order. Lines mixing directions
    come out garbled; that is accepted for the short fields this is used on.
    """
    lines = _LINE_BREAK.split(text)
    fixed = "\n".join(line[::-1] if contains_hebrew(line) else line for line in lines)
    if fixed.endswith("\n"):
        fixed = fixed[:-1]
    return fixed


def decode_bytes(
    raw: bytes,
    encodings: Sequence[str] = DEFAULT_ENCODINGS,
    *,
    source: str = "<bytes>",
) -> DecodedText:
    """Decode ``raw`` with the first encoding that accepts it."""
    for encoding in encodings:
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError:
            logger.info("%s decoding failed for %s, trying next encoding", encoding, source)
            continue
        if text.startswith("\ufeff"):
            text = text[1:]
        return DecodedText(text=text, encoding=encoding)
    raise DecodingError(source, encodings)


def read_decoded(path: PathLike, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> DecodedText:
    """Read ``path`` and decode it without any direction fixing."""
    file_path = Path(path)
    try:
        with file_path.open("rb") as handle:
            raw = handle.read()
    except FileNotFoundError as exc:
        raise NotFoundError(str(path)) from exc
    return decode_bytes(raw, encodings, source=str(path))


def load_text(path: PathLike, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> str:
    """Return the text of ``path``, bidi-corrected when it was not UTF-8."""
    decoded = read_decoded(path, encodings)
    if decoded.is_legacy:
        logger.debug("Applying Hebrew direction fix to %s (%s)", path, decoded.encoding)
        return correct_bidi(decoded.text)
    return decoded.text


__all__ = [
    "DEFAULT_ENCODINGS",
    "DecodedText",
    "contains_hebrew",
    "correct_bidi",
    "decode_bytes",
    "read_decoded",
    "load_text",
]
