"""relsync - keep a secondary build manifest's version in step with the primary one."""

__version__ = "0.1.0"
