"""
Catalog: the immutable command registry and dependency resolver.

Scope
- Index descriptors by identifier and alias for keyword lookup.
- Keep singleton descriptors, in registration order, as the fallback class.
- Resolve declared dependency identifiers to sibling descriptors.
- Remember which module registered each descriptor, so the requirement gate
  can be delegated to it.

Invariants
- Identifiers and aliases are unique across the catalog (singletons excepted,
  they are never looked up by keyword). Violations raise ValueError when the
  catalog is built; nothing is checked at match time.
- After construction the catalog never changes: lookups go through read-only
  views and no method mutates state, so one catalog can serve concurrent
  messages.
"""
import logging
from collections.abc import Iterable
from types import MappingProxyType

from .descriptors import Descriptor
from .modules import Module

log = logging.getLogger(__name__)


class Catalog:
    """
    Ordered, immutable collection of descriptors.

    Construction
    - Catalog(descriptors): from a flat iterable (no owning modules).
    - Catalog.from_modules(modules): from modules, in module then command order.
    """

    def __init__(self, descriptors=(), /, *, modules=()):
        if isinstance(descriptors, str) or not isinstance(descriptors, Iterable):
            raise TypeError("catalog 'descriptors' must be an iterable of descriptors")
        descriptors = tuple(descriptors)
        if not all(isinstance(descriptor, Descriptor) for descriptor in descriptors):
            raise TypeError("catalog 'descriptors' must be an iterable of descriptors")

        modules = tuple(modules)
        if not all(isinstance(module, Module) for module in modules):
            raise TypeError("catalog 'modules' must be an iterable of modules")

        identifiers = {}
        keywords = {}
        singletons = []
        for descriptor in descriptors:
            if identifiers.setdefault(descriptor.identifier, descriptor) is not descriptor:
                raise ValueError(f"catalog identifier {descriptor.identifier!r} is already in use")
            if descriptor.singleton:
                singletons.append(descriptor)
                continue
            for keyword in (descriptor.identifier, *descriptor.aliases):
                if keywords.setdefault(keyword, descriptor) is not descriptor:
                    raise ValueError(
                        f"catalog keyword {keyword!r} of {descriptor.identifier!r} is already "
                        f"in use by {keywords[keyword].identifier!r}"
                    )

        owners = {}
        for module in modules:
            for descriptor in module.commands:
                owners[descriptor.identifier] = module

        self._descriptors = descriptors
        self._identifiers = MappingProxyType(identifiers)
        self._keywords = MappingProxyType(keywords)
        self._singletons = tuple(singletons)
        self._modules = modules
        self._owners = MappingProxyType(owners)

    @classmethod
    def from_modules(cls, modules, /):
        """
        Build a catalog from modules, keeping track of each descriptor's owner.
        """
        modules = tuple(modules)
        if not all(isinstance(module, Module) for module in modules):
            raise TypeError("catalog 'modules' must be an iterable of modules")
        return cls([descriptor for module in modules for descriptor in module.commands], modules=modules)

    @property
    def modules(self):
        return self._modules

    @property
    def singletons(self):
        return self._singletons

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self):
        return len(self._descriptors)

    def __contains__(self, identifier):
        return identifier in self._identifiers

    def __getitem__(self, identifier):
        return self._identifiers[identifier]

    def get(self, identifier, default=None, /):
        return self._identifiers.get(identifier, default)

    def lookup(self, keyword, /):
        """
        Return the keyword descriptor whose identifier or alias equals `keyword`, or None.
        """
        return self._keywords.get(keyword)

    def module_of(self, descriptor, /):
        """
        Return the module that registered `descriptor`, or None.
        """
        return self._owners.get(descriptor.identifier)

    def resolve(self, dependencies, /):
        """
        Map dependency identifiers to descriptors of this catalog.

        Identifiers without a descriptor are simply left out: handlers check for
        presence themselves (soft dependencies).

        Returns
        - MappingProxyType[str, Descriptor]
        """
        resolved = {}
        for identifier in dependencies:
            if (descriptor := self._identifiers.get(identifier)) is not None:
                resolved[identifier] = descriptor
            else:
                log.debug("dependency %r is not in the catalog", identifier)
        return MappingProxyType(resolved)

    def is_requirement_met(self, descriptor, message, /):
        """
        Default requirement gate: delegate to the owning module.

        Unrestricted descriptors always pass. Restricted descriptors without an
        owning module are refused.
        """
        if not descriptor.restricted:
            return True
        if (module := self.module_of(descriptor)) is None:
            return False
        return module.is_requirement_met(descriptor, message)

    def __repr__(self):
        return "catalog(%s)" % ", ".join(repr(descriptor.identifier) for descriptor in self._descriptors)


__all__ = (
    "Catalog",
)
