"""
Keep the production server running.

Starts ``run_waitress.py`` and restarts it after a fixed delay whenever it
exits with a non-zero code or cannot be started at all. A clean exit ends
supervision.
"""

import logging
import subprocess
import sys
import time

from config import settings

logger = logging.getLogger('supervisor')

SERVER_COMMAND = [sys.executable, 'run_waitress.py']


def supervise(command=SERVER_COMMAND, delay=None, run=subprocess.call, sleep=time.sleep, max_restarts=None):
    """Run ``command`` until it exits cleanly. Returns the number of restarts."""
    delay = settings.SUPERVISOR_RESTART_DELAY if delay is None else delay
    restarts = 0
    while True:
        logger.info(f"Starting server: {' '.join(command)}")
        try:
            code = run(command)
        except OSError as e:
            logger.error(f"Failed to start server: {e}")
            code = None

        if code == 0:
            logger.info("Server exited cleanly, stopping supervisor")
            return restarts

        if code is not None:
            logger.warning(f"Server exited with code {code}")
        if max_restarts is not None and restarts >= max_restarts:
            logger.error(f"Giving up after {restarts} restarts")
            return restarts

        logger.info(f"Restarting in {delay} seconds...")
        sleep(delay)
        restarts += 1


if __name__ == '__main__':
    logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    try:
        supervise()
    except KeyboardInterrupt:
        logger.info("Supervisor stopped")
