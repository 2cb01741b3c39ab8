from typing import Callable, Optional

Filter = Callable[[Optional[str]], bool]


def make_filter(seek: str) -> Filter:
    """
    Build a text matcher for list searches.

    An all lower-case ``seek`` matches case-insensitively; any upper-case
    character makes the match case-sensitive. An empty ``seek`` matches
    everything.
    """
    if not seek:
        return lambda text: True
    if seek.lower() != seek:
        return lambda text: seek in text if text else False
    return lambda text: seek in text.lower() if text else False
