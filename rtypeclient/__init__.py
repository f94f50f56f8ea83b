"""Game-state core of a side-scrolling shooter client: ECS, systems, stages, scenes, settings and game logic."""

__version__ = "0.1.0"