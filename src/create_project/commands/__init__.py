"""Command implementations exposed by the create-project CLI."""

from .create import create_project

__all__ = ["create_project"]
