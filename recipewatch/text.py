import re
from typing import Optional, Union

Number = Union[int, float]

_NOT_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_FLOAT = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def substr_between(text: str, left: str = "", right: str = "") -> str:
    """Text after the first `left` and before the next `right`.

    An empty `left` starts at 0 and an empty `right` runs to the end; a `right`
    that never shows up also runs to the end. A `left` that never shows up
    gives "". When no boundary cuts anything the input comes back as is.
    """
    start = 0
    if left:
        pos = text.find(left)
        if pos < 0:
            return ""
        start = pos + len(left)
    end = len(text)
    if right:
        pos = text.find(right, start)
        if pos >= 0:
            end = pos
    if start == 0 and end == len(text):
        return text
    return text[start:end]


def parse_number(text: Optional[str], fallback: Number = 0) -> Number:
    """Parse the digits of `text` ("12.5 silver" -> 12.5), else `fallback`."""
    if text is None:
        return fallback
    m = _LEADING_FLOAT.match(_NOT_NUMERIC.sub("", str(text)))
    if not m:
        return fallback
    value = float(m.group(0))
    return int(value) if value.is_integer() else value
