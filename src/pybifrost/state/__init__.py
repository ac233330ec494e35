"""Client-side state: snapshot ownership, write coalescing, action tracking."""

from pybifrost.state.actions import ActionResult, ActionRunner
from pybifrost.state.coalescer import MutationCoalescer
from pybifrost.state.echo import LocalEchoStore
from pybifrost.state.notifications import Notification, NotificationCenter, NotificationTone
from pybifrost.state.policy import poll_interval
from pybifrost.state.snapshot import Snapshot
from pybifrost.state.synchronizer import PollingSynchronizer, SnapshotSource

__all__ = [
    "ActionResult",
    "ActionRunner",
    "LocalEchoStore",
    "MutationCoalescer",
    "Notification",
    "NotificationCenter",
    "NotificationTone",
    "PollingSynchronizer",
    "Snapshot",
    "SnapshotSource",
    "poll_interval",
]
