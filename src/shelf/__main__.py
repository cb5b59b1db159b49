"""shelf entrypoint.

Run with:
  python -m shelf
"""

import uvicorn

from shelf.config import ServerSettings

def main() -> None:
    s = ServerSettings.from_env()
    uvicorn.run("shelf.app:app", host=s.host, port=s.port, reload=s.reload)

if __name__ == "__main__":
    main()
