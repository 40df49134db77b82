"""Park-Miller minimal standard pseudo-random numbers."""

_UINT64 = (1 << 64) - 1


def do_rand(ctx):
    """Return the successor of state ``ctx``; it is both the value and the next state.

    Computes (7^5 * x) mod (2^31 - 1) with Schrage's method, giving a
    value in [0, 0x7ffffffd].
    """
    x = (ctx & _UINT64) % 0x7FFFFFFE + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += 0x7FFFFFFF
    return x - 1


class ParkMiller:
    """A generator that keeps its state in ``state``."""

    def __init__(self, seed=1):
        self.state = seed & _UINT64

    def next(self):
        """Advance the state and return the new value."""
        self.state = do_rand(self.state)
        return self.state