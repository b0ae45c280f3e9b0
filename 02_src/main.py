"""Entry point: serve the A2A receptionist over HTTP."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv


def main():
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    # Imported after .env is loaded so config picks up the environment
    from receptionist.api import create_fastapi_app
    from receptionist.logging_config import get_logger, setup_logging

    setup_logging()
    logger = get_logger("receptionist.main")

    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))
    # Built-in agents advertise the address they are served on
    os.environ.setdefault("RECEPTIONIST_PUBLIC_URL", f"http://{api_host}:{api_port}")

    logger.info("Serving receptionist on %s:%d", api_host, api_port)
    uvicorn.run(
        create_fastapi_app(),
        host=api_host,
        port=api_port,
        log_config=None,  # keep the JSON logging configured above
    )


if __name__ == "__main__":
    main()
