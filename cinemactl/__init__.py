"""Cinema management: halls, showings, customer accounts, ticketing and a command shell."""

__version__ = "0.1.0"
__all__ = ["__version__"]