import hashlib
import json
from typing import Any, Dict


def payload_hash(payload: Dict[str, Any]) -> str:
    """Stable digest of a JSON-able mapping; key order does not matter."""
    s = json.dumps(payload, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def cache_key(namespace: str, payload: Dict[str, Any]) -> str:
    return f"{namespace}:{payload_hash(payload)}"
