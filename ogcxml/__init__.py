"""ogcxml - event-driven XML parsing of OGC capabilities documents."""

__version__ = "0.1.0"
