"""Call-site lookup for log entries."""

import sys
from typing import Optional, Tuple

# Frames between ContextHook.fire and the code that called a LogHelper
# method: fire <- LogHelper._fire_hooks <- LogHelper._log <- LogHelper.<level>
CALLER_SKIP_FRAMES = 4


def caller_location(skip: int = 0) -> Optional[Tuple[str, int]]:
    """
    Return the file and line of a frame above the caller.

    ``skip=0`` is the function calling ``caller_location`` itself, ``skip=1``
    its caller, and so on.

    Returns:
        ``(filename, lineno)``, or None when the stack is not that deep
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return None
    return frame.f_code.co_filename, frame.f_lineno
