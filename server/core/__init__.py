from .server import SocketServer

__all__ = ["SocketServer"]
