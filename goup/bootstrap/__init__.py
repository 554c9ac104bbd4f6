"""Shell setup script generation."""

from goup.bootstrap.generator import EnvScriptGenerator

__all__ = ["EnvScriptGenerator"]
