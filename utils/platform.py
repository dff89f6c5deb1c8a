import sys
import time
import webbrowser
from typing import Callable, List, Tuple

from utils.logger import log_error, log_info


def is_mac() -> bool:
    return sys.platform == "darwin"


def launch_web_url(url: str) -> bool:
    """Open url in the default browser. Returns False if no browser could be launched."""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        log_error(f"Unable to launch browser: {e}")
        opened = False

    if not opened:
        log_info(f"Open this URL in your browser to continue:\n{url}")
    return bool(opened)


class PendingCalls:
    """Delayed calls that run on whichever thread calls run_due().

    The menu loop drains it between prompts, so scheduled work never runs
    concurrently with the interactive session.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._pending: List[Tuple[float, Callable[[], None]]] = []

    def __call__(self, delay_seconds: float, fn: Callable[[], None]) -> None:
        self._pending.append((self._clock() + max(0.0, float(delay_seconds)), fn))

    def __len__(self) -> int:
        return len(self._pending)

    def run_due(self) -> int:
        """Run every call whose delay has elapsed, in scheduling order. Returns how many ran."""
        now = self._clock()
        due = [fn for when, fn in self._pending if when <= now]
        self._pending = [(when, fn) for when, fn in self._pending if when > now]
        for fn in due:
            fn()
        return len(due)
