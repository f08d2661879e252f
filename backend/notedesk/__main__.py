"""
NoteDesk Backend: Server Entry Point
=======================================

Usage:
    python -m notedesk            # listens on $PORT (default 5000)
    PORT=8080 python -m notedesk
"""

import uvicorn

from notedesk.config import settings


def main() -> None:
    uvicorn.run(
        "notedesk.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
