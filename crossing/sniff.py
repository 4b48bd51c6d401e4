"""Content type sniffing for uploaded objects.

Implements the WHATWG MIME sniffing algorithm in the same form common HTTP
stacks use, so the content type stored with an object depends only on its
leading bytes and never on the file extension.
"""

import functools
import typing

import crossing.types

DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

_WHITESPACE: bytes = b"\t\n\x0c\r "
_TAG_TERMINATORS: bytes = b" >"

Matcher = typing.Callable[[bytes, int], str]


def _first_non_whitespace(data: bytes) -> int:
    """Return the index of the first byte that isn't whitespace."""
    for i, b in enumerate(data):
        if b not in _WHITESPACE:
            return i
    return len(data)


def _exact(pattern: bytes, ctype: str, data: bytes, first_non_ws: int) -> str:
    if data.startswith(pattern):
        return ctype
    return ""


def _masked(
    pattern: bytes,
    mask: bytes,
    ctype: str,
    skip_ws: bool,
    data: bytes,
    first_non_ws: int,
) -> str:
    if skip_ws:
        data = data[first_non_ws:]
    if len(data) < len(pattern):
        return ""
    for p, m, d in zip(pattern, mask, data):
        if d & m != p:
            return ""
    return ctype


def _html(pattern: bytes, data: bytes, first_non_ws: int) -> str:
    data = data[first_non_ws:]
    if len(data) < len(pattern) + 1:
        return ""
    for p, d in zip(pattern, data):
        # Letters in the pattern are upper case, compare case-insensitively
        if ord("A") <= p <= ord("Z"):
            d &= 0xDF
        if p != d:
            return ""
    if data[len(pattern)] not in _TAG_TERMINATORS:
        return ""
    return "text/html; charset=utf-8"


def _mp4(data: bytes, first_non_ws: int) -> str:
    # ISO base media file: a leading "ftyp" box listing an mp4 brand
    if len(data) < 12:
        return ""
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return ""
    if data[4:8] != b"ftyp":
        return ""
    for start in range(8, box_size, 4):
        if start == 12:
            # Minor version number, not a brand
            continue
        if data[start : start + 3] == b"mp4":
            return "video/mp4"
    return ""


def _text(data: bytes, first_non_ws: int) -> str:
    for b in data[first_non_ws:]:
        if b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F:
            return ""
    return "text/plain; charset=utf-8"


def exact(pattern: bytes, ctype: str) -> Matcher:
    """Build a matcher for a fixed byte prefix."""
    return functools.partial(_exact, pattern, ctype)


def masked(pattern: bytes, mask: bytes, ctype: str, skip_ws: bool = False) -> Matcher:
    """Build a matcher comparing a masked byte prefix against a pattern."""
    return functools.partial(_masked, pattern, mask, ctype, skip_ws)


def html(pattern: bytes) -> Matcher:
    """Build a matcher for an HTML tag opening the document."""
    return functools.partial(_html, pattern)


# Order matters, the first matching signature wins.
SIGNATURES: tuple[Matcher, ...] = (
    html(b"<!DOCTYPE HTML"),
    html(b"<HTML"),
    html(b"<HEAD"),
    html(b"<SCRIPT"),
    html(b"<IFRAME"),
    html(b"<H1"),
    html(b"<DIV"),
    html(b"<FONT"),
    html(b"<TABLE"),
    html(b"<A"),
    html(b"<STYLE"),
    html(b"<TITLE"),
    html(b"<B"),
    html(b"<BODY"),
    html(b"<BR"),
    html(b"<P"),
    html(b"<!--"),
    masked(b"<?xml", b"\xff" * 5, "text/xml; charset=utf-8", skip_ws=True),
    exact(b"%PDF-", "application/pdf"),
    exact(b"%!PS-Adobe-", "application/postscript"),
    # UTF BOMs
    masked(b"\xfe\xff\x00\x00", b"\xff\xff\x00\x00", "text/plain; charset=utf-16be"),
    masked(b"\xff\xfe\x00\x00", b"\xff\xff\x00\x00", "text/plain; charset=utf-16le"),
    masked(b"\xef\xbb\xbf\x00", b"\xff\xff\xff\x00", "text/plain; charset=utf-8"),
    # Images
    exact(b"\x00\x00\x01\x00", "image/x-icon"),
    exact(b"\x00\x00\x02\x00", "image/x-icon"),
    exact(b"BM", "image/bmp"),
    exact(b"GIF87a", "image/gif"),
    exact(b"GIF89a", "image/gif"),
    masked(
        b"RIFF\x00\x00\x00\x00WEBPVP",
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        "image/webp",
    ),
    exact(b"\x89PNG\x0d\x0a\x1a\x0a", "image/png"),
    exact(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video
    masked(
        b"FORM\x00\x00\x00\x00AIFF",
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff",
        "audio/aiff",
    ),
    masked(b"ID3", b"\xff\xff\xff", "audio/mpeg"),
    masked(b"OggS\x00", b"\xff" * 5, "application/ogg"),
    masked(b"MThd\x00\x00\x00\x06", b"\xff" * 8, "audio/midi"),
    masked(
        b"RIFF\x00\x00\x00\x00AVI ",
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff",
        "video/avi",
    ),
    masked(
        b"RIFF\x00\x00\x00\x00WAVE",
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff",
        "audio/wave",
    ),
    _mp4,
    exact(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts
    masked(
        b"\x00" * 34 + b"LP",
        b"\x00" * 34 + b"\xff\xff",
        "application/vnd.ms-fontobject",
    ),
    exact(b"\x00\x01\x00\x00", "font/ttf"),
    exact(b"OTTO", "font/otf"),
    exact(b"ttcf", "font/collection"),
    exact(b"wOFF", "font/woff"),
    exact(b"wOF2", "font/woff2"),
    # Archives
    exact(b"\x1f\x8b\x08", "application/x-gzip"),
    exact(b"PK\x03\x04", "application/zip"),
    exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    exact(b"\x00\x61\x73\x6d", "application/wasm"),
    _text,
)


def detect_content_type(data: bytes) -> str:
    """Return the MIME type of data, looking at most at the first 512 bytes.

    Always returns a valid MIME type, falling back to
    ``application/octet-stream`` for unrecognized binary content.
    """
    data = data[: crossing.types.SNIFF_LENGTH]
    first_non_ws = _first_non_whitespace(data)
    for matcher in SIGNATURES:
        ctype = matcher(data, first_non_ws)
        if ctype:
            return ctype
    return DEFAULT_CONTENT_TYPE
