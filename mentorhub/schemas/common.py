from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


def _as_list(value: Any) -> List[Any]:
    """Association proxies and tuples arrive as arbitrary sequences."""
    if value is None:
        return []
    return list(value)


StringList = Annotated[List[str], BeforeValidator(_as_list)]

URL_PATTERN = r"^https?://\S+$"
HttpUrlStr = Annotated[str, StringConstraints(strip_whitespace=True, pattern=URL_PATTERN, max_length=1000)]


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code keeps snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
