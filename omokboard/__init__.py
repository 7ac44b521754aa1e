"""Two-player networked omok: wire protocol, board, game server and framebuffer touchscreen client."""

__version__ = "0.1.0"