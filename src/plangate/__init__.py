"""plangate — planning-workflow document gates and profile resolution."""

__version__ = "0.1.0"
