# main.py

from subprocess import run
from sys import executable

from app.configs import get_settings


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    settings = get_settings()
    cmmd = [
        executable,
        "-m",
        "uvicorn",
        "app.main:app",
        "--host",
        settings.HOST,
        "--port",
        str(settings.PORT),
        "--log-level",
        settings.LOG_LEVEL.lower(),
        "--loop",
        "uvloop",
        "--http",
        "httptools",
    ]
    if settings.ENVIRONMENT == "development":
        cmmd.append("--reload")
    start(cmmd)


if __name__ == "__main__":
    main()
