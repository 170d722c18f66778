"""Voice Journal: transcribe, analyse and reflect on spoken journal entries."""

__version__ = "0.1.0"
