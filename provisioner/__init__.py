"""Project provisioner: creates issue tracker, wiki, SCM and platform artifacts."""

__version__ = "0.1.0"
