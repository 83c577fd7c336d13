"""URL derivations for new media items and comments.

These are heuristics, not content-aware transformations: the poster URL
assumes the media host serves a still frame when the file extension is
swapped for an image one (Cloudinary does). Repositories take them as
plain callables so they can be replaced independently.
"""

import re
from collections.abc import Callable
from urllib.parse import quote, urlsplit, urlunsplit

PosterDeriver = Callable[[str], str]
AvatarDeriver = Callable[[str], str]

COMMENT_AVATAR_TEMPLATE = "https://i.pravatar.cc/40?u={user}"
CHANNEL_AVATAR_TEMPLATE = "https://i.pravatar.cc/48?u={channel}"

_EXTENSION = re.compile(r"\.[A-Za-z0-9]+$")
_WHITESPACE = re.compile(r"\s+")


def swap_extension(url: str, extension: str = ".jpg") -> str:
    """Replace the trailing file extension of the URL path with ``extension``.

    Query string and fragment are kept. A path with no extension gets one
    appended.

    >>> swap_extension("https://x/a.mp4")
    'https://x/a.jpg'
    """
    parts = urlsplit(url)
    last = parts.path.rsplit("/", 1)[-1]
    if _EXTENSION.search(last):
        path = _EXTENSION.sub(extension, parts.path)
    else:
        path = parts.path + extension
    return urlunsplit(parts._replace(path=path))


def poster_from_video(video_src: str) -> str:
    """Default poster/thumbnail derivation: same URL, ``.jpg`` extension."""
    return swap_extension(video_src, ".jpg")


def _strip_whitespace(value: str) -> str:
    return _WHITESPACE.sub("", value)


def comment_avatar(user: str) -> str:
    """Deterministic avatar URL for a commenter."""
    return COMMENT_AVATAR_TEMPLATE.format(user=quote(_strip_whitespace(user), safe=""))


def channel_avatar(channel: str) -> str:
    """Deterministic avatar URL for a channel name."""
    return CHANNEL_AVATAR_TEMPLATE.format(channel=quote(_strip_whitespace(channel), safe=""))
