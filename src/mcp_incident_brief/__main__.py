"""Module entrypoint.

Allows:
    python -m mcp_incident_brief
"""

from __future__ import annotations

from mcp_incident_brief.server.brief_server import main

if __name__ == "__main__":
    main()
