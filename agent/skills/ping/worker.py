"""
Ping skill — lightweight relay health check.

No integrations required. Returns system info so the model can confirm
the tool loop is alive.
"""

import platform
import sys
from datetime import datetime, timezone


def execute(args: dict) -> dict:
    """Return basic system info for the model to interpret."""
    now = datetime.now(timezone.utc)
    echo = args.get("echo", "")

    result = {
        "status": "ok",
        "timestamp": now.isoformat(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "platform": platform.system(),
        "message": "Pong! The relay is healthy and responding.",
    }

    if echo:
        result["echo"] = echo

    return {"success": True, "result": result}
