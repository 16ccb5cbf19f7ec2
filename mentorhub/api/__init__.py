# mentorhub/api/__init__.py
# This file makes the api directory a Python package.

from . import auth
from . import document
from . import goal
from . import mentee
from . import mentor
from . import review
from . import session

__all__ = [
    "auth",
    "mentor",
    "mentee",
    "session",
    "document",
    "goal",
    "review",
]
