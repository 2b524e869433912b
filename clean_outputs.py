"""Delete generated action plan summaries."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src"))

from config_paths import get_results_directory, load_config  # noqa: E402


def _remove_tree(path: Path) -> None:
    if not path.exists():
        print(f"Skipping {path} (not found)")
        return
    if not path.is_dir():
        raise NotADirectoryError(f"Refusing to delete non-directory path: {path}")
    print(f"Removing {path}")
    shutil.rmtree(path)


def main() -> None:
    config = load_config()
    output_dir = get_results_directory(config)
    _remove_tree(output_dir)
    # summaries land under results/ by default; drop the parent too once empty
    results_root = ROOT / "results"
    if results_root.is_dir() and not any(results_root.iterdir()):
        results_root.rmdir()


if __name__ == "__main__":
    main()
