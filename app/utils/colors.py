from typing import Optional

COLORS = [
    "#EF4444",  # red
    "#F59E0B",  # amber
    "#10B981",  # green
    "#3B82F6",  # blue
    "#8B5CF6",  # violet
    "#EC4899",  # pink
    "#06B6D4",  # cyan
    "#F97316",  # orange
]


def _int32(x: int) -> int:
    x &= 0xFFFFFFFF
    return x - 0x100000000 if x & 0x80000000 else x


def hash_string(s: str) -> int:
    """
    djb2 (xor variant) over UTF-16 code units, 32-bit, unsigned result.
    Same value the browser calendar computed, so colours stay stable.
    """
    h = 5381
    units = s.encode("utf-16-le")
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = _int32(h * 33) ^ code
    return h & 0xFFFFFFFF


def color_for_key(key: Optional[object]) -> str:
    if key is None or key == "":
        return COLORS[0]
    return COLORS[hash_string(str(key)) % len(COLORS)]
