"""Open-Meteo forecast client with normalized, framework-free dashboard state."""

__version__ = "0.1.0"
