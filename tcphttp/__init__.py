"""A small HTTP/1.1 server on TCP sockets: request parser, headers, response writer and server."""

__version__ = "0.1.0"