import threading

# Counters are unsigned machine words: they wrap instead of growing forever.
COUNTER_MODULUS = 2 ** 64


class GlobalCounter:
    """
    A single integer shared by every request-handling thread.
    All writes go through increment(), which holds the lock for the whole
    read-modify-write so no update is lost.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value = (self._value + 1) % COUNTER_MODULUS
            return self._value

    def read(self) -> int:
        # A single attribute load; never a partially written value.
        return self._value


class LocalCounter:
    """Counter owned by one request-handling context. Not shared."""

    def __init__(self):
        self.value = 0

    def increment(self) -> int:
        self.value = (self.value + 1) % COUNTER_MODULUS
        return self.value


class CounterState:
    """
    Process-wide counter state: one global counter plus a fresh local
    counter per worker thread, created the first time the thread asks for it.
    """

    def __init__(self):
        self.global_counter = GlobalCounter()
        self._contexts = threading.local()

    def current_context(self) -> LocalCounter:
        ctx = getattr(self._contexts, "counter", None)
        if ctx is None:
            ctx = LocalCounter()
            self._contexts.counter = ctx
        return ctx


# Created once at import, before the server accepts requests.
_state = CounterState()


def increment_global() -> int:
    return _state.global_counter.increment()


def read_global() -> int:
    return _state.global_counter.read()


def current_context() -> LocalCounter:
    return _state.current_context()


def increment_local(ctx: LocalCounter) -> int:
    return ctx.increment()


def read_local(ctx: LocalCounter) -> int:
    return ctx.value


def render(global_count, local_count):
    """Plain-text body shared by /count and /add."""
    return f"global_count: {global_count}\nlocal_count: {local_count}"
