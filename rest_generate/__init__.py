"""rest-generate: interactive scaffolding for Node.js REST API projects."""

__version__ = "1.0.0"
