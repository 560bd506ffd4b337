# app/core/slug_utils.py
import re

_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_COLLAPSE_RE = re.compile(r"[\s_-]+")
_EDGE_HYPHENS_RE = re.compile(r"^-+|-+$")


def generate_slug(text: str) -> str:
    """
    Build a URL-safe slug from a display name.

      - lowercase, trim
      - drop anything that is not a word char, whitespace or '-'
      - collapse whitespace / '_' / '-' runs into a single '-'
      - strip leading/trailing '-'

    Example:
        "Kashmiri Saffron (Mongra)" -> "kashmiri-saffron-mongra"

    Applying it twice gives the same result as applying it once.
    """
    value = text.lower().strip()
    value = _STRIP_RE.sub("", value)
    value = _COLLAPSE_RE.sub("-", value)
    return _EDGE_HYPHENS_RE.sub("", value)
