"""URL helpers for LINK entities."""

from collections.abc import Iterable
from urllib.parse import urljoin, urlsplit, urlunsplit

_HIERARCHICAL_SCHEMES = {"http", "https"}


def normalize_url(href: str, base_url: str | None = None) -> str | None:
    """Resolve an href to an absolute, normalized URL.

    Args:
        href: Raw href attribute value
        base_url: Base used to resolve relative references

    Returns:
        Absolute URL, or None if the href does not resolve to one
    """
    href = href.strip()
    if not href:
        return None
    try:
        if base_url:
            href = urljoin(base_url, href)
        parts = urlsplit(href)
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if not scheme:
        return None

    if scheme in _HIERARCHICAL_SCHEMES:
        if not parts.hostname:
            return None
        # Lower-case the host but keep any userinfo as written
        userinfo, _, hostport = parts.netloc.rpartition("@")
        netloc = f"{userinfo}@{hostport.lower()}" if userinfo else hostport.lower()
        return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))

    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def is_allowed_scheme(url: str, schemes: Iterable[str]) -> bool:
    return urlsplit(url).scheme in set(schemes)
