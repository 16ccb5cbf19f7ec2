from typing import Any, Dict, Optional

from pydantic import BaseModel


def _serialize(data: Any) -> Any:
    """Dump pydantic models with their camelCase aliases, recursing into containers."""
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_serialize(item) for item in data]
    if isinstance(data, dict):
        return {key: _serialize(value) for key, value in data.items()}
    return data


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Build the standard success envelope.

    Args:
        data: Payload; pydantic models are dumped by alias.
        message: Optional human readable message.
        **extra: Additional top-level keys (``count``, ``pagination``...).

    Returns:
        Dict ready to be returned from a route.
    """
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = _serialize(data)
    body.update(extra)
    return body


def error_response(
    message: str,
    error: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    body.update(extra)
    return body
