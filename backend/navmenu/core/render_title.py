"""Title Rendering - the display pipeline applied to stored titles.

Invariants:
    - the_title() is the text filter applied to every displayed title
    - get_the_title() adds the protected/private placeholder formats on top
    - Both are pure string functions
"""

import re

from navmenu.core.domain_types import PostStatus

PROTECTED_TITLE_FORMAT = "Protected: %s"
PRIVATE_TITLE_FORMAT = "Private: %s"
NO_TITLE_FORMAT = "#%d (no title)"

# "&" that does not already start an entity
_LONE_AMPERSAND = re.compile(r"&(?!#?[A-Za-z0-9]+;)")


def the_title(title: str) -> str:
    """Display filter: escape lone ampersands and trim."""
    return _LONE_AMPERSAND.sub("&#038;", title).strip()


def get_the_title(
    title: str,
    status: str = PostStatus.PUBLISH.value,
    password: str = "",
    protected_format: str = PROTECTED_TITLE_FORMAT,
) -> str:
    """Rendered title with the placeholder format for protected/private items."""
    if password:
        title = protected_format % title
    elif status == PostStatus.PRIVATE.value:
        title = PRIVATE_TITLE_FORMAT % title
    return the_title(title)
