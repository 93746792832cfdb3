"""Run the API with uvicorn: ``python -m reader``."""
import uvicorn

from reader.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("reader.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
