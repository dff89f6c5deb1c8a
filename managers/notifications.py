from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List

from utils.logger import log_error


class MusicEvent(str, Enum):
    REFRESH_PLAYLISTS = "refresh_playlists"
    REFRESH_RECOMMENDATIONS = "refresh_recommendations"
    SYNC_PLAYBACK_STATUS = "sync_playback_status"


Handler = Callable[..., Any]


class Notifier:
    """Fire-and-forget event bus between the integration core and the UI.

    Handlers run synchronously in subscription order. A failing handler is
    logged and the remaining handlers still run.
    """

    def __init__(self):
        self._handlers: DefaultDict[MusicEvent, List[Handler]] = defaultdict(list)

    def subscribe(self, event: MusicEvent, handler: Handler) -> Callable[[], None]:
        """Register handler for event. Returns a callable that unsubscribes it."""
        self._handlers[event].append(handler)

        def unsubscribe():
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def publish(self, event: MusicEvent, **payload: Any) -> None:
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(**payload)
            except Exception as e:
                log_error(f"Handler for {event.value} failed: {e}")
