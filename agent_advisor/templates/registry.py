"""Template registry loader and lookup utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import TemplateRegistryError


KNOWLEDGE_DIR = Path(__file__).resolve().parents[1] / "knowledge"
DEFAULT_TEMPLATES = KNOWLEDGE_DIR / "templates.json"


@dataclass
class ToolConfiguration:
    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)
    required_permissions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
            "required_permissions": list(self.required_permissions),
        }


@dataclass
class Template:
    id: str
    name: str
    description: str
    capability_tags: list[str]
    ideal_for: list[str]
    system_prompt: str
    default_tools: list[ToolConfiguration]
    required_dependencies: list[str]
    recommended_integrations: list[str] = field(default_factory=list)


class TemplateRegistry:
    """Read-only, ordered collection of templates. Enumeration order is file order."""

    def __init__(self, templates: dict[str, Template], source_path: str = ""):
        self._templates = templates
        self.source_path = source_path

    @classmethod
    def from_json(cls, path: str | Path) -> "TemplateRegistry":
        path_obj = Path(path)
        try:
            data = json.loads(path_obj.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise TemplateRegistryError(f"Cannot read template registry {path_obj}: {exc}") from exc
        return cls.from_list(data, source_path=str(path_obj.resolve()))

    @classmethod
    def from_list(cls, data: list[dict[str, Any]], source_path: str = "") -> "TemplateRegistry":
        templates: dict[str, Template] = {}
        try:
            for item in data:
                template_id = item["id"]
                if template_id in templates:
                    raise TemplateRegistryError(f"Duplicate template id: {template_id}")
                templates[template_id] = Template(
                    id=template_id,
                    name=item["name"],
                    description=item.get("description", ""),
                    capability_tags=item.get("capability_tags", []),
                    ideal_for=item.get("ideal_for", []),
                    system_prompt=item.get("system_prompt", ""),
                    default_tools=[
                        ToolConfiguration(
                            name=tool["name"],
                            description=tool.get("description", ""),
                            parameters=tool.get("parameters", {}),
                            required_permissions=tool.get("required_permissions", []),
                        )
                        for tool in item.get("default_tools", [])
                    ],
                    required_dependencies=item.get("required_dependencies", []),
                    recommended_integrations=item.get("recommended_integrations", []),
                )
        except (KeyError, TypeError) as exc:
            raise TemplateRegistryError(f"Malformed template entry: {exc}") from exc

        if not templates:
            raise TemplateRegistryError("Template registry is empty")
        return cls(templates, source_path=source_path)

    def get(self, template_id: str) -> Template | None:
        return self._templates.get(template_id)

    def list_all(self) -> list[Template]:
        return list(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates


_default_registry: TemplateRegistry | None = None


def load_default_registry(path: str | Path | None = None) -> TemplateRegistry:
    """Load the bundled templates, or the file at path when given."""
    return TemplateRegistry.from_json(Path(path).expanduser() if path else DEFAULT_TEMPLATES)


def default_registry() -> TemplateRegistry:
    """Bundled registry, loaded once per process."""
    global _default_registry
    if _default_registry is None:
        _default_registry = load_default_registry()
    return _default_registry
