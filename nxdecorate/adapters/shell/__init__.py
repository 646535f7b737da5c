"""Shell adapters — filesystem links and subprocess delegation."""

from nxdecorate.adapters.shell.symlink import SymlinkAdapter, UnsupportedPlatformError

__all__ = ["SymlinkAdapter", "UnsupportedPlatformError"]
