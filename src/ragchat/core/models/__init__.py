"""Domain models for the chat engines.

Re-exports every public symbol so imports like
``from ragchat.core.models import Response`` work.
"""

from .constants import *  # noqa: F401, F403
from .event import *  # noqa: F401, F403
from .nodes import *  # noqa: F401, F403
from .response import *  # noqa: F401, F403
