"""Parse ``key=value`` parameter files into an :class:`EmailConfiguration`."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from mailcomposer.core.errors import ParseError
from mailcomposer.models import EmailConfiguration
from mailcomposer.repository.text_loader import (
    PathLike,
    correct_bidi,
    load_text,
    read_decoded,
)

logger = logging.getLogger(__name__)

DEPRECATED_KEYS = frozenset({"sendamail", "sendemail"})

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_PORT = re.compile(r"[+-]?[0-9]+")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def _parse_port(value: str) -> int:
    if not _PORT.fullmatch(value):
        raise ParseError("port", value, "expected an integer")
    return int(value)


def _split_addresses(value: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


# parameter key -> (field name, converter, carries right-to-left text)
_FIELDS: Dict[str, Tuple[str, Callable[[str], Any], bool]] = {
    "smtp_server": ("smtp_server", str, False),
    "port": ("port", _parse_port, False),
    "user": ("user", str, False),
    "password": ("password", str, False),
    "from_": ("from_address", str, True),
    "from": ("from_address", str, True),
    "to": ("to", _split_addresses, True),
    "bcc": ("bcc", _split_addresses, True),
    "fileandpath": ("attachment_path", str, False),
    "attachment": ("attachment_path", str, False),
    "attachment_path": ("attachment_path", str, False),
    "filename": ("attachment_name", str, True),
    "attachment_name": ("attachment_name", str, True),
    "subject": ("subject", str, True),
    "body": ("body", str, True),
    "cert": ("use_tls", _parse_bool, False),
    "tls": ("use_tls", _parse_bool, False),
    "use_tls": ("use_tls", _parse_bool, False),
    "html": ("use_html", _parse_bool, False),
    "use_html": ("use_html", _parse_bool, False),
    "logo": ("logo_path", str, False),
    "logo_path": ("logo_path", str, False),
    "signaturefile": ("signature_file", str, True),
    "signature_file": ("signature_file", str, True),
    "signature": ("signature_file", str, True),
    "debug": ("debug", _parse_bool, False),
    "reply_to": ("reply_to", str, True),
    "replyto": ("reply_to", str, True),
    "read_receipt": ("read_receipt", _parse_bool, False),
    "readreceipt": ("read_receipt", _parse_bool, False),
    "teamname": ("team_name", str, True),
    "team_name": ("team_name", str, True),
    "htmltemplate": ("html_template", str, True),
    "html_template": ("html_template", str, True),
}


def iter_pairs(text: str) -> Iterator[Tuple[str, str]]:
    """Yield trimmed ``(key, value)`` pairs in file order.

    Only the first ``=`` splits; lines without one are skipped.
    """
    for line in _LINE_BREAK.split(text):
        key, sep, value = line.partition("=")
        if not sep:
            continue
        yield key.strip(), value.strip()


def _fix_direction(value: str, field_name: str) -> str:
    if field_name in {"to", "bcc"}:
        return ",".join(correct_bidi(item.strip()) for item in value.split(","))
    return correct_bidi(value)


def parse_pairs(pairs: Iterable[Tuple[str, str]], *, legacy: bool = False) -> Dict[str, Any]:
    """Apply ``pairs`` in order; the last assignment to a field wins."""
    values: Dict[str, Any] = {}
    for key, raw in pairs:
        if key in DEPRECATED_KEYS:
            logger.info("Ignoring deprecated parameter: %s", key)
            continue
        spec = _FIELDS.get(key)
        if spec is None:
            continue
        field_name, convert, rtl = spec
        if legacy and rtl:
            raw = _fix_direction(raw, field_name)
        values[field_name] = convert(raw)
    return values


def companion_path(file_path: PathLike, suffix: str) -> Path:
    """``file_path`` with its extension replaced by ``suffix``."""
    return Path(file_path).with_suffix(suffix)


def parse_attachment_list(text: str) -> List[str]:
    """One path per line, bare or as ``key=path``; ``#`` lines and blanks skipped."""
    paths: List[str] = []
    for line in _LINE_BREAK.split(text):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            value = line.split("=", 1)[1].strip()
            if value:
                paths.append(value)
        else:
            paths.append(line)
    return paths


def _load_body_override(file_path: Path) -> Optional[Tuple[str, bool]]:
    markdown = companion_path(file_path, ".md")
    if markdown.exists() and markdown != file_path:
        logger.info("Loading Markdown email body from: %s", markdown)
        return load_text(markdown), True

    text = companion_path(file_path, ".txt")
    if text.exists() and text != file_path:
        logger.info("Loading email body from: %s", text)
        return load_text(text), False

    return None


def parse_parameter_file(file_path: PathLike) -> EmailConfiguration:
    """Build the configuration for one run from ``file_path`` and its companions."""
    path = Path(file_path)
    decoded = read_decoded(path)
    if decoded.is_legacy:
        logger.info("Parameter file %s decoded as %s", path, decoded.encoding)

    values = parse_pairs(iter_pairs(decoded.text), legacy=decoded.is_legacy)

    override = _load_body_override(path)
    if override is not None:
        body, markdown = override
        values["body"] = body
        if markdown:
            values["use_html"] = True

    attachment_list = companion_path(path, ".list")
    if attachment_list.exists() and attachment_list != path:
        logger.info("Loading attachments from: %s", attachment_list)
        attachments = parse_attachment_list(read_decoded(attachment_list).text)
        if attachments:
            values["attachment_paths"] = tuple(attachments)

    return EmailConfiguration(source_path=str(path), **values)


__all__ = [
    "parse_parameter_file",
    "parse_pairs",
    "iter_pairs",
    "parse_attachment_list",
    "companion_path",
]
