"""
Application entry point.

Dependencies: uvicorn, orchestrator.api
System role: Server launch
"""

import uvicorn

from orchestrator.api.main import create_app

app = create_app()


def main() -> None:
    """Run the API server."""
    uvicorn.run(
        "orchestrator.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
