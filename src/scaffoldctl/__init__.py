"""scaffoldctl — project scaffolding from templates or an external generator."""

__version__ = "0.3.0"
