"""
S-57 attribute code tables.

Source datasets store enumerated S-57 attributes as integer codes (as
strings). These tables resolve them to readable values; anything unknown
resolves to None rather than raising.
"""

from typing import Any, Dict, List, Optional

# COLOUR
S57_COLORS: Dict[str, str] = {
    "1": "white",
    "2": "black",
    "3": "red",
    "4": "green",
    "5": "blue",
    "6": "yellow",
    "7": "grey",
    "8": "brown",
    "9": "amber",
    "10": "violet",
    "11": "orange",
    "12": "magenta",
    "13": "pink",
}

# BOYSHP
S57_BUOY_SHAPES: Dict[str, str] = {
    "1": "conical",
    "2": "can",
    "3": "spherical",
    "4": "pillar",
    "5": "spar",
    "6": "barrel",
    "7": "super-buoy",
    "8": "ice buoy",
}

# BCNSHP
S57_BEACON_SHAPES: Dict[str, str] = {
    "1": "stake",
    "2": "withy",
    "3": "beacon tower",
    "4": "lattice beacon",
    "5": "pile beacon",
    "6": "cairn",
    "7": "buoyant beacon",
}

# CATLAM
S57_LATERAL_CATEGORIES: Dict[str, str] = {
    "1": "port",
    "2": "starboard",
    "3": "preferred_channel_starboard",
    "4": "preferred_channel_port",
}

# COLPAT
S57_COLOR_PATTERNS: Dict[str, str] = {
    "1": "horizontal",
    "2": "vertical",
    "3": "diagonal",
    "4": "squared",
    "5": "stripes",
    "6": "border",
}


def _code_key(code: Any) -> Optional[str]:
    if code is None:
        return None
    key = str(code).strip()
    return key or None


def map_s57_code(code: Any, mapping: Dict[str, str]) -> Optional[str]:
    """
    Resolve a single S-57 code.

    Example:
        >>> map_s57_code("1", S57_LATERAL_CATEGORIES)
        'port'
        >>> map_s57_code("99", S57_LATERAL_CATEGORIES) is None
        True
    """
    key = _code_key(code)
    if key is None:
        return None
    return mapping.get(key)


def parse_colors(colour: Any) -> Optional[List[str]]:
    """
    Resolve a comma-separated COLOUR value into color names.

    Unknown codes are dropped; if nothing is left the result is None.

    Example:
        >>> parse_colors("3,6")
        ['red', 'yellow']
    """
    if colour is None:
        return None

    if isinstance(colour, (list, tuple)):
        codes = [str(c) for c in colour]
    else:
        codes = str(colour).split(",")

    colors = [S57_COLORS[c.strip()] for c in codes if c.strip() in S57_COLORS]
    return colors or None
