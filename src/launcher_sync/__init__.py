"""Item synchronization layer for the launcher's line-based data files.

Keeps the persisted lines of every data file consistent with the launch list,
the editable grid and the registration form. Nothing here performs file
I/O; see :mod:`launcher_sync.repositories.protocols` for the collaborators.

Keep this import light: it must not pull in Qt.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
