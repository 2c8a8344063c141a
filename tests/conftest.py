"""
Shared fixtures for hpi-requirements tests.
"""

import pytest

from hpi_requirements import error_handling
from hpi_requirements.cli_config import reset_config

ENTERPRISE_POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/maven-v4_0_0.xsd">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.cloudbees.jenkins</groupId>
  <artifactId>jenkins-enterprise-war</artifactId>
  <version>1.480.3.1</version>
  <packaging>war</packaging>
  <dependencies>
    <dependency>
      <groupId>org.jenkins-ci.main</groupId>
      <artifactId>jenkins-war</artifactId>
      <version>1.480.3</version>
      <type>war</type>
    </dependency>
    <dependency>
      <groupId>com.cloudbees.nectar.plugins</groupId>
      <artifactId>cloudbees-license</artifactId>
      <version>4.0</version>
      <type>hpi</type>
      <scope>provided</scope>
    </dependency>
    <dependency>
      <groupId>org.jenkins-ci.plugins</groupId>
      <artifactId>credentials</artifactId>
      <version>1.4</version>
      <type>hpi</type>
      <scope>provided</scope>
    </dependency>
    <dependency>
      <groupId>org.jenkins-ci.plugins</groupId>
      <artifactId>git</artifactId>
      <version>1.3.0</version>
      <type>hpi</type>
    </dependency>
    <dependency>
      <groupId>commons-io</groupId>
      <artifactId>commons-io</artifactId>
      <version>2.4</version>
      <scope>provided</scope>
    </dependency>
  </dependencies>
</project>
"""


def make_pom(*dependencies: str, xmlns: bool = False) -> str:
    """Build a minimal pom.xml around raw <dependency> snippets."""
    ns = ' xmlns="http://maven.apache.org/POM/4.0.0"' if xmlns else ""
    return (
        f"<project{ns}>\n  <dependencies>\n"
        + "".join(dependencies)
        + "  </dependencies>\n</project>\n"
    )


def dependency(
    artifact_id=None, version=None, scope=None, dep_type=None
) -> str:
    """Build a <dependency> snippet; None leaves the child out."""
    parts = []
    for tag, value in (
        ("artifactId", artifact_id),
        ("version", version),
        ("scope", scope),
        ("type", dep_type),
    ):
        if value is not None:
            parts.append(f"      <{tag}>{value}</{tag}>\n")
    return "    <dependency>\n" + "".join(parts) + "    </dependency>\n"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config files and env vars of the developer machine out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("HPI_REQUIREMENTS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HPI_REQUIREMENTS_LOG_JSON", raising=False)
    monkeypatch.chdir(tmp_path)
    # fresh handler per test; monkeypatch restores the module global afterwards
    monkeypatch.setattr(error_handling, "_global_error_handler", error_handling.ErrorHandler())
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir(tmp_path):
    """Directory for generated pom files."""
    poms = tmp_path / "poms"
    poms.mkdir()
    return poms


@pytest.fixture
def write_pom(temp_dir):
    """Write pom content to a file and return its path."""

    def _write(content: str, name: str = "pom.xml"):
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def enterprise_pom(write_pom):
    """A namespaced Jenkins Enterprise WAR pom with two provided plugins."""
    return write_pom(ENTERPRISE_POM)
