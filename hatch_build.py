"""Custom build hook for Hatchling to embed build info."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface


class CustomBuildHook(BuildHookInterface):
    """Writes undoredo/_build_info.py with the git commit hash and commit date."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        self._write_build_info()
        build_data.setdefault("artifacts", []).append("undoredo/_build_info.py")

    def _write_build_info(self) -> None:
        project_root = Path(self.root)
        target_path = project_root / "undoredo" / "_build_info.py"

        commit = self._run_git(["rev-parse", "HEAD"], cwd=project_root)
        date = self._run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=project_root)

        target_path.write_text(
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n",
            encoding="utf-8",
        )

    def _run_git(self, args: list[str], cwd: Path) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
            return out.decode().strip() or None
        except (subprocess.CalledProcessError, FileNotFoundError, OSError):
            # No git checkout (e.g. building from an sdist)
            return None
