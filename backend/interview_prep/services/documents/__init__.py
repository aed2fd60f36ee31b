from . import deletion, listing

__all__ = ["deletion", "listing"]
