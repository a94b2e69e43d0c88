"""Run the API with uvicorn: python -m order_api"""

import uvicorn

from order_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "order_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
