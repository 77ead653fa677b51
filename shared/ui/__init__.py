from .console import ChatConsole

__all__ = ["ChatConsole"]
