"""A block chain file reader and a small HTTP chat server and client."""

__version__ = "0.1.0"