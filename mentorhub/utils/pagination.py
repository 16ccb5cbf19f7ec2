from typing import Optional, Tuple

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def clamp_pagination(
    limit: Optional[int],
    offset: Optional[int],
    *,
    default: int = DEFAULT_LIMIT,
    maximum: int = MAX_LIMIT,
) -> Tuple[int, int]:
    """Fall back to the default page size and cap it at ``maximum``; negative offsets become 0."""
    if not limit or limit < 1:
        limit = default
    return min(limit, maximum), max(offset or 0, 0)
