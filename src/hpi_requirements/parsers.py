import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .dependency import Dependency, PluginRequirement
from .error_handling import ErrorCategory, MissingFieldError, log_parsing_error
from .structured_logging import (
    log_dependency_skipped,
    log_pom_parsed,
    log_requirements_generated,
)

PathLike = Union[str, Path]


def _local_name(name: str) -> str:
    """Drop a '{namespace}' prefix from an element or attribute name."""
    if name[:1] == "{":
        return name.split("}", 1)[1]
    return name


def strip_namespaces(root: ET.Element) -> ET.Element:
    """
    Remove namespaces from every element tag and attribute name in place.

    Maven poms usually declare xmlns="http://maven.apache.org/POM/4.0.0";
    after this pass plain names like "dependency" match regardless.

    Returns:
        ET.Element: The same root element, for chaining
    """
    for elem in root.iter():
        # comments and processing instructions have non-str tags
        if isinstance(elem.tag, str):
            elem.tag = _local_name(elem.tag)
        if any(key[:1] == "{" for key in elem.attrib):
            elem.attrib = {_local_name(key): value for key, value in elem.attrib.items()}
    return root


def _child_text(parent: ET.Element, tag: str) -> Optional[str]:
    """
    Text content of the first child named tag.

    Returns None when there is no such child and "" when it is empty.
    Text is returned verbatim, without trimming.
    """
    child = parent.find(tag)
    if child is None:
        return None
    return "".join(child.itertext())


def _read_pom(file_path: PathLike) -> ET.Element:
    """Parse the pom, log any failure, and let it propagate."""
    try:
        tree = ET.parse(file_path)
    except ET.ParseError as e:
        log_parsing_error(
            f"Invalid XML in pom.xml: {e}",
            "parsers",
            "_read_pom",
            file_path=str(file_path),
            exception=e,
        )
        raise
    except OSError as e:
        log_parsing_error(
            f"Cannot read pom.xml: {e}",
            "parsers",
            "_read_pom",
            file_path=str(file_path),
            exception=e,
            category=ErrorCategory.FILESYSTEM,
        )
        raise
    return strip_namespaces(tree.getroot())


def parse_pom_xml(file_path: PathLike) -> List[Dependency]:
    """
    Parses a Maven pom.xml file and returns its direct dependencies.

    Only /project/dependencies/dependency is considered; dependencyManagement,
    profiles and plugin dependencies are ignored.

    Args:
        file_path: Path to the pom.xml file

    Returns:
        List[Dependency]: Dependencies in document order

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        xml.etree.ElementTree.ParseError: If the file is not well-formed XML
    """
    root = _read_pom(file_path)

    dependencies = []
    if root.tag == "project":
        for position, dep in enumerate(root.findall("dependencies/dependency"), start=1):
            dependencies.append(
                Dependency(
                    scope=_child_text(dep, "scope"),
                    type=_child_text(dep, "type"),
                    artifact_id=_child_text(dep, "artifactId"),
                    version=_child_text(dep, "version"),
                    position=position,
                )
            )

    log_pom_parsed(Path(file_path).name, len(dependencies))
    return dependencies


def select_plugin_requirements(
    dependencies: Iterable[Dependency],
) -> Iterator[PluginRequirement]:
    """
    Yield a requirement for every provided-scope hpi dependency.

    Raises:
        MissingFieldError: If a matching dependency has no artifactId or version
    """
    for dep in dependencies:
        if not dep.is_provided_plugin:
            log_dependency_skipped(dep.artifact_id, dep.scope, dep.type)
            continue

        if dep.artifact_id is None:
            raise MissingFieldError("artifactId", dep.position)
        if dep.version is None:
            raise MissingFieldError("version", dep.position, dep.artifact_id)

        yield PluginRequirement(name=dep.artifact_id, version=dep.version)


def generate_requirements(file_path: PathLike) -> Iterator[str]:
    """
    Rendered require(...) lines for the plugins a Jenkins Enterprise WAR
    pom.xml provides, in document order.
    """
    count = 0
    for requirement in select_plugin_requirements(parse_pom_xml(file_path)):
        count += 1
        yield requirement.render()
    log_requirements_generated(count)
