"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

INIT_JS = (
    '"use strict";\n'
    'Object.defineProperty(exports, "__esModule", { value: true });\n'
    'require("symbol-observable");\n'
    'const fs = require("fs");\n'
)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An Angular workspace with the Angular and Nx CLIs installed."""
    bin_dir = tmp_path / "node_modules" / ".bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "nx").write_text("#!/usr/bin/env node\nrequire('nx');\n")
    (bin_dir / "ng").write_text("#!/usr/bin/env node\nrequire('@angular/cli');\n")

    lib_dir = tmp_path / "node_modules" / "@angular" / "cli" / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "init.js").write_text(INIT_JS)

    manifest = {
        "name": "demo",
        "version": "0.0.0",
        "scripts": {"ng": "ng", "start": "ng serve", "build": "ng build"},
    }
    (tmp_path / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    return tmp_path


@pytest.fixture
def read_manifest():
    """Return a helper that loads package.json from a workspace."""

    def _read(root: Path) -> dict:
        return json.loads((root / "package.json").read_text())

    return _read
