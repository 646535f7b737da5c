"""Node adapters — package.json and installed CLI bootstrap files."""

from nxdecorate.adapters.node.bootstrap import BootstrapPatchAdapter
from nxdecorate.adapters.node.manifest import ManifestAdapter

__all__ = ["BootstrapPatchAdapter", "ManifestAdapter"]
