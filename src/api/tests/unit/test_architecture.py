"""Architecture tests using pytest-archon.

These tests enforce DDD layer boundaries within the directory and
connectors bounded contexts, and the direction of the dependency between
them: connectors builds on directory, never the reverse.
"""

import importlib
from pathlib import Path

import pytest
from pytest_archon import archrule


class TestDirectoryLayerBoundaries:
    """The directory domain and ports stay free of frameworks and storage."""

    def test_domain_does_not_import_infrastructure(self):
        (
            archrule("directory_domain_no_infrastructure")
            .match("directory.domain*")
            .should_not_import("directory.infrastructure*", "infrastructure*")
            .check("directory")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("directory_domain_no_application")
            .match("directory.domain*")
            .should_not_import("directory.application*")
            .check("directory")
        )

    def test_domain_does_not_import_frameworks(self):
        (
            archrule("directory_domain_no_frameworks")
            .match("directory.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check("directory")
        )

    def test_ports_do_not_import_infrastructure(self):
        (
            archrule("directory_ports_no_infrastructure")
            .match("directory.ports*")
            .should_not_import("directory.infrastructure*")
            .check("directory")
        )

    def test_application_does_not_import_infrastructure(self):
        """Services depend on repository protocols, not implementations."""
        (
            archrule("directory_application_no_infrastructure")
            .match("directory.application*")
            .should_not_import("directory.infrastructure*")
            .check("directory")
        )


class TestConnectorsLayerBoundaries:
    """The connectors domain is pure: PKCE, state and normalization."""

    def test_domain_has_no_io(self):
        (
            archrule("connectors_domain_no_io")
            .match("connectors.domain*")
            .should_not_import(
                "connectors.infrastructure*",
                "connectors.application*",
                "httpx*",
                "sqlalchemy*",
                "fastapi*",
            )
            .check("connectors")
        )

    def test_ports_do_not_import_infrastructure(self):
        (
            archrule("connectors_ports_no_infrastructure")
            .match("connectors.ports*")
            .should_not_import("connectors.infrastructure*")
            .check("connectors")
        )


class TestContextDependencyDirection:
    def test_directory_does_not_import_connectors(self):
        """Directory owns the stored data and knows nothing about providers."""
        (
            archrule("directory_no_connectors")
            .match("directory*")
            .should_not_import("connectors*")
            .check("directory")
        )


class TestPackageResolution:
    """Bounded contexts resolve to source only, never to test directories."""

    @pytest.mark.parametrize("package", ["directory", "connectors"])
    def test_context_package_has_a_single_source_path(self, package):
        module = importlib.import_module(package)

        paths = [Path(path) for path in module.__path__]

        assert len(paths) == 1
        assert "tests" not in paths[0].parts
