"""Stages: their backgrounds, enemies and spawn pacing."""

from __future__ import annotations

from dataclasses import dataclass

from rtypeclient.components import EntityType
from rtypeclient.pathhelper import PathHelper


@dataclass(frozen=True)
class Stage:
    background_path: str
    enemy_types: tuple[EntityType, ...]
    spawn_interval: float


def normalize_stage(new_stage: int) -> int:
    """Map a stage number to a defined stage; stages past 5 cycle through 2 to 4."""
    if new_stage <= 5:
        return new_stage
    return (new_stage - 2) % 3 + 2


class StageSystem:
    """Holds the stage table and the current stage."""

    def __init__(self, path_helper: PathHelper | None = None) -> None:
        self.path_helper = path_helper if path_helper is not None else PathHelper()
        self.current_stage = 0
        self.stages: dict[int, Stage] = {}
        self._load_stages()

    def _load_stages(self) -> None:
        monsters = (EntityType.MONSTER,)
        self.stages = {
            1: Stage(self.path_helper.image_path("game_red.png"), monsters, 2.0),
            2: Stage("game_cave.png", monsters, 1.5),
            3: Stage("game_lava.png", monsters, 1.5),
            4: Stage("game_final.png", monsters, 1.5),
            5: Stage("game_red.png", monsters, 1.5),
        }

    def set_stage(self, stage_number: int) -> None:
        """Switch stage; unknown stage numbers are ignored."""
        if stage_number in self.stages:
            self.current_stage = stage_number

    def current_stage_data(self) -> Stage:
        """Data of the current stage; KeyError if no stage has been set."""
        return self.stages[self.current_stage]