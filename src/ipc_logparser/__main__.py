"""Module entrypoint.

Allows:
    python -m ipc_logparser path/to/application.properties
"""

from __future__ import annotations

from ipc_logparser.cli import main

if __name__ == "__main__":
    main()
