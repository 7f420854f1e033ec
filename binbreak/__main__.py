from __future__ import annotations

import logging
import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Ensure the repository root (parent of this package) is on ``sys.path``.

    If this module is executed as a script (``python binbreak/__main__.py``),
    the package may not be discoverable by Python.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m binbreak
    from .app import run  # type: ignore[attr-defined]
    from .config import GameConfig
except ImportError:
    # Works when executed as a script (absolute path, IDE "Run File", etc.)
    _ensure_repo_root_on_path()
    from binbreak.app import run  # type: ignore[attr-defined]
    from binbreak.config import GameConfig


def main() -> int:
    """Entry point for running the game from the command line."""
    config = GameConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(config=config)


if __name__ == "__main__":
    raise SystemExit(main())
