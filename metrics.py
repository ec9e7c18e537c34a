import threading

# In-memory metric storage; handlers run on several threads, so guard it.
_counters = {}
_lock = threading.Lock()

def inc(name, labels):
    """
    Increments a counter.
    Example: name="http_requests_total", labels={"status": "200"}
    """
    # Prometheus label string: 'path="/api/add",status="200"'
    label_str = ",".join(f'{k}="{v}"' for k, v in labels.items())
    key = f"{name}{{{label_str}}}"

    with _lock:
        _counters[key] = _counters.get(key, 0) + 1

def get(name, labels):
    label_str = ",".join(f'{k}="{v}"' for k, v in labels.items())
    with _lock:
        return _counters.get(f"{name}{{{label_str}}}", 0)

def generate_text():
    """Returns the metrics in Prometheus text format."""
    with _lock:
        lines = [f"{key} {value}" for key, value in sorted(_counters.items())]
    return "\n".join(lines) + "\n"
