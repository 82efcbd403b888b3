"""
Channel list parsing.

The configured list is a space-separated string of Twitch logins. Names are
lowercased and deduplicated, first occurrence wins.
"""
from typing import Iterable, List, Union


def parse_channel_names(raw: Union[str, Iterable[str], None]) -> List[str]:
    """
    Normalize a configured channel list.

    Args:
        raw: "Chan1 chan2  CHAN1" (a list of tokens is also accepted)

    Returns:
        ["chan1", "chan2"]
    """
    if not raw:
        return []
    if not isinstance(raw, str):
        raw = " ".join(str(token) for token in raw)

    seen = set()
    names = []
    for token in raw.split():
        name = token.lower()
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names
