"""System Clock: wall-clock time in whole epoch seconds."""

import time


class SystemClock:
    """Clock backed by time.time(), the authority that stamps locally issued tokens."""

    def now(self) -> int:
        return int(time.time())
