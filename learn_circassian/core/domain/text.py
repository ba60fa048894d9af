# learn_circassian\core\domain\text.py
"""
Pure text helpers for stored markup and user queries.

None of these functions raise for any `str` input.
"""

PALOCHKA = "Ӏ"
PALOCHKA_PLACEHOLDER = "1"

# Order is load-bearing: `&amp;` must come last so `&amp;lt;` ends up as the
# literal text `&lt;` instead of `<`.
_ENTITY_SUBSTITUTIONS = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&amp;", "&"),
)

# Backslash first, otherwise the escapes inserted for % and _ would be doubled.
_LIKE_ESCAPES = (
    ("\\", "\\\\"),
    ("%", "\\%"),
    ("_", "\\_"),
)

LIKE_ESCAPE_CHAR = "\\"


def decode_entities(text: str) -> str:
    """
    Decode the fixed set of HTML entities used by stored entry content.

    Some entries carry HTML-encoded markup inside an outer HTML wrapper
    (e.g. `&lt;font color=&#39;sienna&#39;&gt;`). Each substitution runs
    exactly once, in order, so the result is never double-decoded.
    """
    for entity, char in _ENTITY_SUBSTITUTIONS:
        text = text.replace(entity, char)
    return text


def escape_like(value: str) -> str:
    """
    Escape LIKE wildcards so user input matches literally.
    Use with `ESCAPE '\\'` in the SQL statement.
    """
    for char, escaped in _LIKE_ESCAPES:
        value = value.replace(char, escaped)
    return value


def normalize_query(text: str) -> str:
    """
    Bring raw search input to the form of the stored keys: the palochka letter
    is stored as the placeholder digit and words are lower-case.
    """
    return text.replace(PALOCHKA, PALOCHKA_PLACEHOLDER).lower()


def to_palochka(text: str) -> str:
    """Display form of a stored key: placeholder digits become palochka."""
    return text.replace(PALOCHKA_PLACEHOLDER, PALOCHKA)
