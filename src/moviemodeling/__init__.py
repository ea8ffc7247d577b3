"""Movie data modeling demo: four document models over RavenDB."""

__version__ = "0.1.0"
