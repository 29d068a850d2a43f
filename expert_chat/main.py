"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI serves the chat proxy, NiceGUI serves the chat page.
    Both accessible on port 8000.
    """
    import uvicorn
    from nicegui import ui

    from expert_chat.api.app import create_app
    from expert_chat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="Expert Chat",
        favicon="📈",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "expert-chat-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")
    logger.info(f"Chat UI available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run FastAPI and NiceGUI as separate servers.

    FastAPI on PORT (default 8000), NiceGUI on UI_PORT (default 8080). The
    chat page reaches the proxy through API_BASE_URL, which defaults to the
    FastAPI server started here.
    """
    import subprocess
    import time

    api_port = int(os.getenv("PORT", "8000"))
    ui_port = int(os.getenv("UI_PORT", "8080"))
    ui_env = {
        **os.environ,
        "UI_PORT": str(ui_port),
        "API_BASE_URL": os.getenv("API_BASE_URL", f"http://localhost:{api_port}"),
    }

    logger.info(f"Starting FastAPI on http://localhost:{api_port}")
    logger.info(f"Starting NiceGUI on http://localhost:{ui_port}")

    fastapi_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "expert_chat.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            str(api_port),
            "--reload",
        ]
    )
    nicegui_proc = subprocess.Popen(
        [sys.executable, "-c", "from expert_chat.ui.chat_page import main; main()"],
        env=ui_env,
    )

    try:
        while fastapi_proc.poll() is None and nicegui_proc.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        fastapi_proc.terminate()
        nicegui_proc.terminate()
        fastapi_proc.wait()
        nicegui_proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Expert Chat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
