import uvicorn

from davbrowser.config.config import settings


def main() -> None:
    uvicorn.run("davbrowser.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
