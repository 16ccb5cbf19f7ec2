# mentorhub/crud/__init__.py
# Database access, one module per resource. Modules flush; callers commit.

from . import document
from . import goal
from . import mentee
from . import mentor
from . import review
from . import session
from . import user

__all__ = ["user", "mentor", "mentee", "session", "document", "goal", "review"]
