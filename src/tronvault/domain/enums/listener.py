from enum import Enum


class ListenerState(str, Enum):
    """Block listener lifecycle."""

    INITIALIZING = "INITIALIZING"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"
