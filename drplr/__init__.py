"""drplr: upload files, shorten links and share notes on Droplr."""

__version__ = '1.2.0'
