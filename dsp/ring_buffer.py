"""Fixed-length circular sample store addressed by absolute position."""

import numpy as np


class RingBuffer:
    """Circular buffer where position p lives in slot p mod length.

    Unlike a delay line there is no write pointer: callers address samples by
    their absolute (ever-increasing) position and the buffer keeps whichever
    of them fall in the last `length` slots.

    Usage:
        rb = RingBuffer(64)
        rb[130] = x
        rb[130]   # -> x, until position 194 overwrites the slot
    """

    def __init__(self, length: int):
        self.buffer = np.zeros(length, dtype=np.float64)
        self.length = length

    def __getitem__(self, pos: int) -> float:
        # Python's % is a floor-mod, so negative positions wrap correctly
        return self.buffer[pos % self.length]

    def __setitem__(self, pos: int, value: float):
        self.buffer[pos % self.length] = value

    def reset(self):
        """Clear the buffer."""
        self.buffer[:] = 0.0
