import logging

import uvicorn

from marathon.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL
from marathon.utilities.network import get_local_ip


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from marathon.api.api_run import app

    local_url = f"http://localhost:{APP_PORT}"
    local_ip = get_local_ip()
    print(f"Money Marathon running on {local_url} (Press CTRL+C to quit)")
    # Also show the LAN-accessible URL for other devices on the same network
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: http://{local_ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
