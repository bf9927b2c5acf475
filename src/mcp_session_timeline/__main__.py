"""Module entrypoint.

Allows:
    python -m mcp_session_timeline
"""

from __future__ import annotations

from mcp_session_timeline.server.timeline_server import main

if __name__ == "__main__":
    main()
