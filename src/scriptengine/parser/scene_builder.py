"""Scene accumulator shared by the screenplay parsers."""

from __future__ import annotations

from dataclasses import dataclass, field

from scriptengine.parser.classifier import SceneHeading
from scriptengine.parser.models import NameRegistry, Scene


@dataclass
class SceneBuilder:
    """Collects scenes plus the document-level character and location sets.

    Scene numbers are assigned in the order scenes are opened, starting at 1.
    """

    scenes: list[Scene] = field(default_factory=list)
    characters: NameRegistry = field(default_factory=NameRegistry)
    locations: NameRegistry = field(default_factory=NameRegistry)

    @property
    def current_scene(self) -> Scene | None:
        return self.scenes[-1] if self.scenes else None

    def open_scene(self, heading: SceneHeading) -> Scene:
        scene = Scene(
            scene_number=len(self.scenes) + 1,
            heading=heading.heading,
            location=heading.location,
            time_of_day=heading.time_of_day,
            interior=heading.interior,
        )
        self.scenes.append(scene)
        self.locations.add(scene.location.upper())
        return scene

    def ensure_scene(self) -> Scene:
        """Return the open scene, synthesizing the opening scene if needed."""
        scene = self.current_scene
        if scene is None:
            scene = Scene.opening(len(self.scenes) + 1)
            self.scenes.append(scene)
            self.locations.add(scene.location.upper())
        return scene
