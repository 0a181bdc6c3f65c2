"""Basic tests for hyper-types.

These tests verify the package imports correctly and exposes its metadata.
"""

import importlib
import sys

import pytest

import hyper_types


class TestImports:
    """Test that all modules can be imported."""

    def test_import_main_module(self):
        """Test that main module imports successfully."""
        import hyper_types

        assert hyper_types is not None

    def test_version_defined(self):
        """Test that version is defined."""
        from hyper_types import __version__

        assert isinstance(__version__, str)
        assert __version__ == "1.0.0"

    @pytest.mark.parametrize("name", hyper_types.__all__)
    def test_import_submodule(self, name):
        """Every module listed in __all__ imports."""
        module = importlib.import_module(f"hyper_types.{name}")
        assert module is not None

    def test_import_cli(self):
        """Test CLI module import."""
        from hyper_types import cli

        assert callable(cli.main)


class TestPlatform:
    """Test platform requirements."""

    def test_python_version(self):
        """Test Python version requirement."""
        assert sys.version_info >= (3, 8), "Python 3.8+ required"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
