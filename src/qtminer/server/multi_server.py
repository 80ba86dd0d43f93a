"""
Threaded TCP server: one worker thread and one Session per connection.
"""

from typing import Optional, Sequence
import argparse
import logging
import pickle
import socketserver

from .protocol import ObjectStream
from .session import Session
from ..config import Config
from ..database.db_access import DbAccess

logger = logging.getLogger(__name__)


class ClientHandler(socketserver.StreamRequestHandler):
    """Runs one session for the lifetime of a connection."""

    def handle(self):
        logger.info("Client connected from %s:%d", *self.client_address[:2])
        stream = ObjectStream(self.rfile, self.wfile)
        session = Session(stream, self.server.db, self.server.cluster_folder)
        try:
            session.serve()
        except (pickle.UnpicklingError, ValueError) as e:
            logger.warning("Malformed request from %s: %s", self.client_address[0], e)
            self._reply_error(stream, e)
        except ConnectionError as e:
            logger.info("Connection with %s lost: %s", self.client_address[0], e)
        except Exception as e:
            logger.exception("Session with %s failed", self.client_address[0])
            self._reply_error(stream, e)
        else:
            logger.info("Client %s disconnected", self.client_address[0])

    @staticmethod
    def _reply_error(stream: ObjectStream, error: Exception) -> None:
        try:
            stream.write(f"Error: {error}")
        except OSError as e:
            logger.warning("Could not report error to client: %s", e)


class MultiServer(socketserver.ThreadingTCPServer):
    """QT clustering server accepting any number of concurrent clients."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, host: str = Config.HOST, port: int = Config.PORT,
                 db: Optional[DbAccess] = None,
                 cluster_folder: str = Config.CLUSTER_FOLDER):
        self.db = db or DbAccess()
        self.cluster_folder = cluster_folder
        super().__init__((host, port), ClientHandler)

    def server_close(self):
        super().server_close()
        self.db.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="QT clustering server")
    parser.add_argument('--host', default=Config.HOST, help="Address to bind")
    parser.add_argument('--port', type=int, default=Config.PORT, help="Port to listen on")
    parser.add_argument('--database-url', default=Config.DATABASE_URL,
                        help="SQLAlchemy URL of the record source")
    parser.add_argument('--cluster-folder', default=Config.CLUSTER_FOLDER,
                        help="Folder for saved cluster files")
    parser.add_argument('--log-level', default=Config.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    with MultiServer(args.host, args.port, DbAccess(args.database_url),
                     args.cluster_folder) as server:
        logger.info("Server listening on %s:%d", *server.server_address[:2])
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down")


if __name__ == '__main__':
    main()
