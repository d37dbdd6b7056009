"""Area impact analysis: population and building exposure within a drawn hazard area."""

__version__ = "0.1.0"
