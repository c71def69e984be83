import uvicorn

from passlab.config import settings


def main() -> None:
    uvicorn.run("passlab.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
