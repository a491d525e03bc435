"""
Helpers for the memoized properties of model objects.
"""

from functools import cached_property


def clear_cached_properties(instance: object) -> None:
    """
    Drops every computed `cached_property` value of an instance, so it will be
    recomputed on next access.
    :param instance: The model object whose cache should be cleared.
    """
    for cls in type(instance).__mro__:
        for name, attr in vars(cls).items():
            if isinstance(attr, cached_property):
                instance.__dict__.pop(name, None)
