"""Prayer times for Turkish cities, aggregated from several providers."""

__version__ = "0.1.0"
