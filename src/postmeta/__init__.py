"""postmeta — blog post front-matter authoring utility."""

__version__ = "0.1.0"
