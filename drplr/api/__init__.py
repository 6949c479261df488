"""
Client for the Droplr REST API.
Import from here to keep command modules clean.
"""

from .client import DroplrClient, create_client
from .drops import Drops
from .boards import Boards

__all__ = [
    'DroplrClient', 'create_client',
    'Drops', 'Boards',
]
