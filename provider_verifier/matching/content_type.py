import json
from typing import Any, Mapping, Optional

from provider_verifier.model.http import get_header

JSON = "application/json"
XML = "application/xml"
TEXT = "text/plain"


def mime_type(content_type: Optional[str]) -> Optional[str]:
    """Reduces a Content-Type value to its lowercase `type/subtype`, dropping parameters."""
    if not content_type:
        return None
    base = content_type.split(";", 1)[0].strip().lower()
    return base or None


def is_structured(content_type: Optional[str]) -> bool:
    """True for JSON content types, including `+json` suffixed ones."""
    base = mime_type(content_type)
    if base is None:
        return False
    return base == JSON or base.endswith("+json")


def sniff(body: Any) -> Optional[str]:
    """Guesses the content type of a body that does not declare one."""
    if body is None:
        return None
    if isinstance(body, (dict, list)):
        return JSON
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not isinstance(body, str):
        # Bare JSON scalars recorded in a contract
        return JSON
    text = body.strip()
    if not text:
        return None
    if text[0] in "{[":
        try:
            json.loads(text)
            return JSON
        except ValueError:
            pass
    if text.startswith("<"):
        return XML
    return TEXT


def resolve(declared: Optional[str], headers: Mapping[str, str], body: Any) -> Optional[str]:
    """Content type of a message: declared type, then Content-Type header, then sniffed from the body."""
    return mime_type(declared) or mime_type(get_header(headers, "Content-Type")) or sniff(body)
