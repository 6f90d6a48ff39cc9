"""Allow ``python -m aide_providers`` to run the debugging CLI."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
