__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "authenticate_user",
    "get_current_user",
    "get_optional_user",
    "require_roles",
    "require_mentor",
    "oauth2_scheme",
    "success_response",
    "error_response",
    "clamp_pagination",
]


def __getattr__(name):
    if name in {
        "verify_password",
        "get_password_hash",
        "create_access_token",
        "create_user_token",
        "decode_access_token",
        "authenticate_user",
        "get_current_user",
        "get_optional_user",
        "require_roles",
        "require_mentor",
        "oauth2_scheme",
    }:
        from . import security as _security
        return getattr(_security, name)
    if name in {"success_response", "error_response"}:
        from . import response as _response
        return getattr(_response, name)
    if name == "clamp_pagination":
        from . import pagination as _pagination
        return _pagination.clamp_pagination
    raise AttributeError(f"module 'mentorhub.utils' has no attribute '{name}'")
