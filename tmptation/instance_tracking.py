"""
Instance registry - remember every object a class created, so they can all be cleaned up
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar('T')


class InstanceRegistry:
    '''
    Live instances, kept in creation order, in a separate list per class.

    Instances are filed under their exact class, so a subclass gets a list of
    its own. The registry only remembers objects; it doesn't own them.

    Not thread-safe. When tests run on several threads, the caller has to
    serialize access.
    '''

    def __init__(self) -> None:
        self._instances_by_type: dict[type, list[Any]] = {}
        self._ids_by_type: dict[type, set[int]] = {}

    def __repr__(self) -> str:
        counts = ', '.join(f'{type_.__name__}: {len(instances)}'
                           for type_, instances in self._instances_by_type.items())
        return f'<{type(self).__name__} {{{counts}}}>'

    def _get_list(self, type_: type) -> list[Any]:
        return self._instances_by_type.setdefault(type_, [])

    def register(self, instance: Any) -> None:
        type_ = type(instance)
        # The registry holds a reference, so an `id` can't be reused while registered.
        ids = self._ids_by_type.setdefault(type_, set())
        if id(instance) in ids:
            raise ValueError(f'{instance!r} is already registered')
        ids.add(id(instance))
        self._get_list(type_).append(instance)
        logger.debug('Registered %r', instance)

    def instances(self, type_: type[T]) -> list[T]:
        """Get a copy of the live instances of `type_`, oldest first."""
        return list(self._get_list(type_))

    def drain(self, type_: type[T]) -> list[T]:
        '''
        Empty the list of `type_` and return what was in it.

        The list is reset before the caller acts on any instance, so an
        instance created during cleanup lands in the fresh list and doesn't
        get swept up by the cleanup in progress.
        '''
        instances = self._instances_by_type.pop(type_, [])
        self._ids_by_type.pop(type_, None)
        logger.debug('Drained %s instances of %s', len(instances), type_.__name__)
        return instances

    def reset(self, type_: Optional[type] = None) -> None:
        """Forget the instances of `type_`, or of every class if `type_` is `None`."""
        if type_ is None:
            self._instances_by_type.clear()
            self._ids_by_type.clear()
        else:
            self._instances_by_type.pop(type_, None)
            self._ids_by_type.pop(type_, None)


default_registry = InstanceRegistry()
