# In src/hpi_requirements/dependency.py
from dataclasses import dataclass
from typing import Optional

PROVIDED_SCOPE = "provided"
HPI_TYPE = "hpi"


@dataclass(frozen=True)
class Dependency:
    """A single <dependency> entry as read from a pom.xml."""

    scope: Optional[str]
    type: Optional[str]
    artifact_id: Optional[str]
    version: Optional[str]
    position: int = 0

    @property
    def is_provided_plugin(self) -> bool:
        """True for provided-scope dependencies packaged as .hpi plugins."""
        return self.scope == PROVIDED_SCOPE and self.type == HPI_TYPE


@dataclass(frozen=True)
class PluginRequirement:
    """A plugin entry for the bootstrapper's require(...) table."""

    name: str
    version: str

    def render(self) -> str:
        return 'require("' + self.name + '","' + self.version + '"),'
