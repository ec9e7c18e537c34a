import json
import logging
import os
import sys
from datetime import datetime, timezone

# Logs go to stdout, one JSON object per line, so a container runtime can collect them.
def resolve_level(name):
    """Level number for a name like "debug"; unknown names fall back to INFO."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO

logger = logging.getLogger("api")
logger.setLevel(resolve_level(os.getenv("LOG_LEVEL", "INFO")))
handler = logging.StreamHandler(sys.stdout)
logger.addHandler(handler)
logger.propagate = False

def _emit(level, entry):
    entry = {"ts": datetime.now(timezone.utc).isoformat(), "level": level, **entry}
    logger.log(logging.getLevelName(level), json.dumps(entry, default=str))

def log_request(request_id, method, path, status, latency, **extras):
    """
    Emits a structured JSON log line for one HTTP request.
    Extra keyword fields (e.g. pubkey, result) are merged into the entry.
    """
    entry = {
        "request_id": request_id,
        "method": method,
        "path": path,
        "status": status,
        "latency_ms": round(latency * 1000, 2) # Convert seconds to ms
    }
    entry.update(extras)
    _emit("INFO", entry)

def log_event(level, event, **extras):
    """Structured line for anything that is not a finished request (startup, RPC failures)."""
    _emit(level, {"event": event, **extras})
