"""cboard entrypoint.

Run with:
  python -m cboard
"""

import uvicorn

from cboard.settings import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "cboard.app:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )

if __name__ == "__main__":
    main()
