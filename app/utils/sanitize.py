"""
HTML sanitization for bookmark text leaving the API.

Tags outside the allowlist are escaped rather than removed, so a title such
as ``<script>alert(1)</script>`` comes back as readable, inert text. Event
handler attributes (``onerror``, ``onclick`` ...) are always dropped.
A bare ``&`` is plain text and comes back unchanged, so ``Tom & Jerry`` and
query-string URLs survive; existing character entities are left as they are.
"""

from typing import Optional
from bleach.sanitizer import Cleaner
from bleach.html5lib_shim import convert_entity, match_entity, next_possible_entity

ALLOWED_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "em", "i", "img",
    "li", "ol", "p", "pre", "small", "span", "strong", "sub", "sup", "u", "ul",
})

ALLOWED_ATTRS = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRS,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def _placeholder_for(value: str) -> str:
    """A private-use character that does not occur in value"""
    codepoint = 0xE000
    while chr(codepoint) in value:
        codepoint += 1
    return chr(codepoint)


def _is_entity(part: str) -> bool:
    entity = match_entity(part)
    return entity is not None and convert_entity(entity) is not None


def _hide_bare_ampersands(value: str, placeholder: str) -> str:
    parts = []
    for part in next_possible_entity(value):
        if part.startswith("&") and not _is_entity(part):
            part = placeholder + part[1:]
        parts.append(part)
    return "".join(parts)


def sanitize_html(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if "&" not in value:
        return _CLEANER.clean(value)

    # The cleaner would turn every bare & into &amp;
    placeholder = _placeholder_for(value)
    cleaned = _CLEANER.clean(_hide_bare_ampersands(value, placeholder))
    return cleaned.replace(placeholder, "&")
