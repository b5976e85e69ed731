"""
Run the docshare API with uvicorn: ``python -m docshare`` or ``docshare``.
Host, port and log level come from Settings (.env: HOST, PORT, LOG_LEVEL).
"""
import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "docshare.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        proxy_headers=settings.trust_forwarded_for,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    main()
