"""
Run the worker with the Waitress WSGI server.
Each request is handled on its own thread from the pool.
"""
import logging

from waitress import serve

from coactivo.utils.env import env_int
from main import app

logger = logging.getLogger("coactivo")

if __name__ == '__main__':
    port = env_int('PORT', 3000)
    threads = env_int('WAITRESS_THREADS', 4)
    logger.info(f"Worker listening on port {port} ({threads} threads)")
    serve(app, host='0.0.0.0', port=port, threads=threads)
