"""
Nominal pipe size token handling.

NPS designations mix whole and fractional inches ("1/8", "1-1/4", "24").
They are parsed into exact rationals so sizes sort numerically without
evaluating data-derived strings.
"""

import re
from fractions import Fraction
from typing import Optional

# "1-1/4", "1 1/4", "3/4", "6", "2.5"
_MIXED_RE = re.compile(r"^(\d+)[-\s]+(\d+)/(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)/(\d+)$")
_DECIMAL_RE = re.compile(r"^\d+(\.\d+)?$")

# Trailing inch unit: '"', "IN", "INCH", "INCHES"
_INCH_UNIT_RE = re.compile(r'\s*(?:"|IN(?:CH(?:ES)?)?)$')

# "DN150", "NB 150", "150mm", "DN 150 mm"
_BORE_RE = re.compile(r"^(?:(?:DN|NB)\s*(\d+(?:\.\d+)?)\s*(?:MM)?|(\d+(?:\.\d+)?)\s*MM)$")


def normalize_nps(token: str) -> str:
    """Canonical form of an NPS token: strips 'NPS', inch marks and spacing.

    >>> normalize_nps('NPS 1 1/4"')
    '1-1/4'
    """
    text = str(token).strip().upper()
    if text.startswith("NPS"):
        text = text[3:].strip()
    text = _INCH_UNIT_RE.sub("", text).strip()
    text = re.sub(r"\s+", " ", text)

    match = _MIXED_RE.match(text)
    if match:
        return f"{int(match.group(1))}-{int(match.group(2))}/{int(match.group(3))}"
    return text


def nps_value(token: str) -> Optional[Fraction]:
    """Exact numeric value of an NPS token, or None if it is not one."""
    text = normalize_nps(token)

    match = _MIXED_RE.match(text)
    if match:
        whole, num, den = (int(g) for g in match.groups())
        if den == 0:
            return None
        return whole + Fraction(num, den)

    match = _FRACTION_RE.match(text)
    if match:
        num, den = int(match.group(1)), int(match.group(2))
        if den == 0:
            return None
        return Fraction(num, den)

    if _DECIMAL_RE.match(text):
        return Fraction(text)

    return None


def nps_sort_key(token: str):
    """Sort key placing NPS tokens in numeric order; unparseable tokens last."""
    value = nps_value(token)
    if value is None:
        return (1, Fraction(0), str(token))
    return (0, value, str(token))


def parse_bore_mm(token: str) -> Optional[float]:
    """Nominal bore in mm from an explicit bore token ("DN150", "150mm")."""
    text = str(token).strip().upper()
    match = _BORE_RE.match(text)
    if not match:
        return None
    return float(match.group(1) or match.group(2))
