"""
Run the inventory UI and the health API side by side in one container.

The health API takes $PORT so the platform's probes reach it; Streamlit gets
$STREAMLIT_PORT (default 8501), moved up to the next free port when taken.
"""

import logging
import os
import socket
import subprocess
import threading
import time

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

MAX_PORT_ATTEMPTS = 10


def port_taken(port):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(('localhost', port)) == 0


def pick_port(preferred, label):
    """First free port at or above preferred; preferred itself if none is free"""
    for candidate in range(preferred, preferred + MAX_PORT_ATTEMPTS):
        if not port_taken(candidate):
            if candidate != preferred:
                logger.info(f"Port {preferred} is busy, {label} will use {candidate}")
            return candidate
    logger.warning(f"No free port for {label} in {preferred}-{preferred + MAX_PORT_ATTEMPTS - 1}")
    return preferred


def run_process(label, command):
    logger.info(f"Starting {label}: {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError as e:
        logger.error(f"{label} exited with status {e.returncode}")
        raise


def main():
    api_port = pick_port(int(os.getenv('PORT', '8080')), "health API")
    ui_port = pick_port(int(os.getenv('STREAMLIT_PORT', '8501')), "inventory UI")

    api_thread = threading.Thread(
        target=run_process,
        args=("health API", ["uvicorn", "api:app", "--host", "0.0.0.0", "--port", str(api_port)]),
        daemon=True,
    )
    api_thread.start()

    # Let uvicorn bind before Streamlit starts
    time.sleep(2)

    run_process("inventory UI", [
        "streamlit", "run", "app.py",
        "--server.port", str(ui_port),
        "--server.address", "0.0.0.0",
        "--server.headless", "true",
    ])


if __name__ == "__main__":
    main()
