"""UNO Lite: a two-player UNO engine with a chat command surface."""

__version__ = "0.1.0"
