"""KDE Connect packet core: wire packets and identity handshake validation."""

__version__ = "0.1.0"
