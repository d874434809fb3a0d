import re
from typing import Optional

FRACTION_MAP = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅐": "1/7",
    "⅑": "1/9",
    "⅒": "1/10",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}
FRACTION_CHARS = "".join(FRACTION_MAP.keys())

_NUMBER = r"(?:\d+(?:\.\d+)?|\.\d+)"
_DECIMAL_RE = re.compile(rf"^{_NUMBER}$")
_FRACTION_RE = re.compile(rf"^({_NUMBER})\s*/\s*({_NUMBER})$")
_MIXED_RE = re.compile(rf"^(\d+)\s+({_NUMBER})\s*/\s*({_NUMBER})$")


def normalize_fractions(value: str) -> str:
    """Replace unicode vulgar fractions with ``a/b`` text, e.g. ``1½`` -> ``1 1/2``."""
    if not value:
        return value
    s = re.sub(rf"(\d)([{FRACTION_CHARS}])", r"\1 \2", value)
    for k, v in FRACTION_MAP.items():
        s = s.replace(k, v)
    return s


def _divide(numerator: str, denominator: str) -> Optional[float]:
    denom = float(denominator)
    if denom == 0:
        return None
    return float(numerator) / denom


def parse_quantity(raw: Optional[str]) -> float:
    """Parse a quantity such as ``2``, ``0.5``, ``1/2`` or ``1 1/2``.

    Anything unparseable, including a zero denominator, yields ``0.0``.
    """
    if raw is None:
        return 0.0
    value = normalize_fractions(raw).strip()
    if not value:
        return 0.0

    if _DECIMAL_RE.match(value):
        return float(value)

    m = _FRACTION_RE.match(value)
    if m:
        return _divide(m.group(1), m.group(2)) or 0.0

    m = _MIXED_RE.match(value)
    if m:
        fraction = _divide(m.group(2), m.group(3))
        if fraction is None:
            return 0.0
        return float(m.group(1)) + fraction

    return 0.0
