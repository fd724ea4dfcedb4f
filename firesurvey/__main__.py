"""Run the backend with uvicorn: `python -m firesurvey`."""

import uvicorn

from firesurvey.config import settings


def main() -> None:
    uvicorn.run(
        "firesurvey.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
