"""
Adaptive similarity threshold.

Short CJK queries carry little semantic signal per character, so they get
a permissive cutoff; longer Latin queries get a stricter one.

Dependencies: None (pure function)
System role: Vector branch cutoff selection
"""

import enum
import re

CJK_SHARE = 0.3

_CJK_CHAR = re.compile(r"[぀-ヿ㐀-䶿一-鿿豈-﫿가-힯]")
_LATIN_ONLY = re.compile(r"^[A-Za-z\s]+$")

# (max length, threshold) buckets, checked in order
_CJK_BUCKETS = ((2, 0.2), (4, 0.3))
_CJK_DEFAULT = 0.4
_LATIN_BUCKETS = ((3, 0.4), (10, 0.5))
_LATIN_DEFAULT = 0.6
_MIXED_THRESHOLD = 0.3


class QueryScript(str, enum.Enum):
    CJK = "cjk"
    LATIN = "latin"
    MIXED = "mixed"


def detect_script(query: str) -> QueryScript:
    """
    Classify a query by writing system.

    CJK when CJK characters exceed 30% of the non-whitespace characters,
    LATIN when the query is ASCII letters and whitespace only, MIXED
    otherwise (including blank queries).
    """
    text = query.strip()
    visible = [char for char in text if not char.isspace()]
    if not visible:
        return QueryScript.MIXED

    cjk_count = sum(1 for char in visible if _CJK_CHAR.match(char))
    if cjk_count / len(visible) > CJK_SHARE:
        return QueryScript.CJK
    if _LATIN_ONLY.match(text):
        return QueryScript.LATIN
    return QueryScript.MIXED


def _bucket(length: int, buckets: tuple[tuple[int, float], ...], default: float) -> float:
    for max_length, threshold in buckets:
        if length <= max_length:
            return threshold
    return default


def select_threshold(query: str, override: float | None = None) -> float:
    """
    Minimum cosine similarity for vector hits of query.

    Args:
        query: Raw user query
        override: Caller-supplied threshold, returned unchanged when set

    Returns:
        float: Threshold in [0, 1]
    """
    if override is not None:
        return override

    text = query.strip()
    script = detect_script(text)
    if script is QueryScript.CJK:
        return _bucket(len(text), _CJK_BUCKETS, _CJK_DEFAULT)
    if script is QueryScript.LATIN:
        return _bucket(len(text), _LATIN_BUCKETS, _LATIN_DEFAULT)
    return _MIXED_THRESHOLD
