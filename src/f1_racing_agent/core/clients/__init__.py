from .ergast import ErgastClient

__all__ = ["ErgastClient"]
