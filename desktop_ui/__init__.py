"""Qt desktop host for the pairs engine. Requires PySide6."""
