"""Locating asset files relative to the running program."""

from __future__ import annotations

import os
import sys


def executable_dir() -> str:
    """Directory of the running program, always ending with a slash."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    path = os.path.realpath(program)
    cut = max(path.rfind("/"), path.rfind("\\"))
    head = path if cut < 0 else path[:cut]
    return head + "/"


class PathHelper:
    """Builds paths to fonts, images, sounds and shaders."""

    def __init__(self, base_dir: str | None = None) -> None:
        self.base_dir = executable_dir() if base_dir is None else base_dir

    def full_path(self, relative_path: str) -> str:
        return self.base_dir + relative_path

    def font_path(self, file_name: str) -> str:
        return self.base_dir + "../../assets/fonts/" + file_name

    def image_path(self, file_name: str) -> str:
        return self.base_dir + "../../assets/images/" + file_name

    def sound_path(self, file_name: str) -> str:
        return self.base_dir + "../../assets/sounds/" + file_name

    def asset_path(self, file_name: str) -> str:
        return self.base_dir + "../../assets/" + file_name

    def shader_path(self, file_name: str) -> str:
        return self.base_dir + "../../assets/shaders/" + file_name