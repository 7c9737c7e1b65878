"""Run the API with uvicorn: `python -m daynotes` (honours HOST and PORT)."""

import uvicorn

from daynotes.config import settings


def main() -> None:
    uvicorn.run(
        "daynotes.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
