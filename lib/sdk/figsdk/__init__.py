from figsdk.client import FigFlagClient
from figsdk.client import FigFlagError
from figsdk.client import Snapshot
from figsdk.client import create_client

__all__ = ["FigFlagClient", "FigFlagError", "Snapshot", "create_client"]
