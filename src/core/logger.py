from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict


LOG_PATH = Path(os.getenv("AGENT_LOG_PATH", "agent.log"))


def log_event(request_id: str, event: str, data: Dict[str, Any]) -> None:
    """
    Append a structured log entry as JSON.
    """
    try:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "event": event,
            "data": data,
        }
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with LOG_PATH.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except Exception:
        # Logging should never break an agent; swallow failures.
        return
