"""
Skill Registry — the tools the model may call.

A skill is a directory holding a skill.yaml and a worker module that exposes
execute(args: dict) -> dict:

    agent/skills/ping/
        skill.yaml    name, description, parameters (JSON Schema), worker_module?
        worker.py     def execute(args): ...
"""

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import yaml

from agent.interfaces.ai_provider import ToolDefinition

logger = logging.getLogger(__name__)

BUILTIN_SKILLS_DIR = Path(__file__).parent


class SkillNotFound(Exception):
    pass


@dataclass
class SkillDefinition:
    """A loaded skill: tool metadata plus where its worker lives."""

    name: str
    description: str
    parameters: dict                    # JSON Schema for the tool arguments
    worker_module: str = ""

    @classmethod
    def from_yaml(cls, yaml_file: Path) -> "SkillDefinition":
        with open(yaml_file) as f:
            config = yaml.safe_load(f) or {}

        missing = [key for key in ("name", "description") if not config.get(key)]
        if missing:
            raise ValueError(f"{yaml_file}: missing {', '.join(missing)}")

        return cls(
            name=config["name"],
            description=" ".join(str(config["description"]).split()),
            parameters=config.get("parameters") or {"type": "object", "properties": {}},
            worker_module=config.get("worker_module") or f"agent.skills.{config['name']}.worker",
        )

    def to_tool(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.parameters,
        )


class SkillRegistry:
    """Holds skill definitions and resolves their workers on demand."""

    def __init__(self):
        self._skills: dict[str, SkillDefinition] = {}

    def register(self, skill: SkillDefinition) -> None:
        self._skills[skill.name] = skill

    def load_from_directory(self, skills_dir: Path) -> None:
        """Register every subdirectory of skills_dir that has a skill.yaml."""
        if not skills_dir.is_dir():
            logger.warning(f"Skills directory not found: {skills_dir}")
            return

        for yaml_file in sorted(skills_dir.glob("*/skill.yaml")):
            self.register(SkillDefinition.from_yaml(yaml_file))

    def get_tools(self, enabled_skills: Optional[list[str]] = None) -> list[ToolDefinition]:
        """Tool declarations for the enabled skills, or for all when None."""
        if enabled_skills is None:
            return [skill.to_tool() for skill in self._skills.values()]
        return [
            self._skills[name].to_tool()
            for name in enabled_skills
            if name in self._skills
        ]

    def get_skill(self, skill_name: str) -> Optional[SkillDefinition]:
        return self._skills.get(skill_name)

    def get_worker(self, skill_name: str) -> Callable:
        """Import the skill's worker module and return its execute()."""
        skill = self._skills.get(skill_name)
        if skill is None:
            raise SkillNotFound(f"Skill '{skill_name}' not registered")

        execute = getattr(importlib.import_module(skill.worker_module), "execute", None)
        if execute is None:
            raise SkillNotFound(
                f"Skill '{skill_name}' worker module has no execute() function"
            )
        return execute

    def list_skills(self) -> list[SkillDefinition]:
        return list(self._skills.values())

    def list_skill_names(self) -> list[str]:
        return list(self._skills)
