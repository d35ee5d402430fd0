from .resolver import ResolverClient

__all__ = ["ResolverClient"]
