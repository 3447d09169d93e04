"""Set-Cookie header parser."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class SetCookie:
    """
    One ``Set-Cookie`` line split into name, value and attributes.

    Attribute names are stored lower-cased; flag attributes (``Secure``,
    ``HttpOnly``) map to an empty string.

        Set-Cookie: sid=abc123; Path=/; Secure; SameSite=Lax
    """
    name: str
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    raw: str = ""

    def has(self, attr: str) -> bool:
        return attr.lower() in self.attributes

    def get(self, attr: str) -> Optional[str]:
        return self.attributes.get(attr.lower())

    @property
    def secure(self) -> bool:
        return self.has("secure")

    @property
    def http_only(self) -> bool:
        return self.has("httponly")

    @property
    def same_site(self) -> Optional[str]:
        return self.get("samesite")


def parse_set_cookie(line: str) -> SetCookie:
    raw = line.strip()
    # tolerate a full header line as captured from a raw response
    if raw.lower().startswith("set-cookie:"):
        raw = raw.split(":", 1)[1].strip()

    pair, *attrs = raw.split(";")
    name, sep, value = pair.partition("=")
    name = name.strip()
    if not sep:
        # RFC 6265: a pair without "=" is a nameless cookie value
        name, value = "", name
    cookie = SetCookie(name=name or "(unnamed)", value=value.strip(), raw=raw)

    for attr in attrs:
        key, _, val = attr.partition("=")
        key = key.strip().lower()
        if not key:
            continue
        cookie.attributes.setdefault(key, val.strip())
    return cookie
