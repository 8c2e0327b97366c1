"""Network helper used by `marathon.main` to print the LAN address of the server."""
import logging
import socket

logger = logging.getLogger(__name__)


def get_local_ip(probe_host: str = "8.8.8.8") -> str:
    """Return the address of the interface that routes to probe_host, or '127.0.0.1'.

    Connecting a UDP socket sends nothing; it only makes the OS pick a source address.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect((probe_host, 80))
        ip = str(s.getsockname()[0])
    except OSError as e:
        logger.debug("No routable interface found: %s", e)
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip
