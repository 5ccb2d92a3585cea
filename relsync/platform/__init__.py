"""Platform boundary: subprocesses and filesystem writes."""

from relsync.platform.files import atomic_write_text
from relsync.platform.process import ProcessError, run

__all__ = ["ProcessError", "atomic_write_text", "run"]
