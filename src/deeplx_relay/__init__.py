"""DeepLX Relay: a free/pro translation relay for the DeepL web backend.

Accepts translation requests over HTTP, turns each one into the exact
JSON-RPC payload the DeepL web endpoint expects, and normalises the reply
into a small, stable response shape.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
``api/server.py`` and ``api/routes/health.py`` import ``__version__`` from
here.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# When the package is installed (``pip install -e .``) the version comes
# from the distribution metadata.  Importing from a bare checkout falls back
# to a development marker so the application can still start.
try:
    __version__: str = version("deeplx_relay")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
