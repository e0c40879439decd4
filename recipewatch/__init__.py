"""Watch bdocodex for new cooking and alchemy recipes."""

__version__ = "0.2.0"
