"""
Service Container
Name-keyed bindings with lazy resolution and singleton caching
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from cosy.exceptions import ResolutionError

Factory = Callable[['ServiceContainer'], Any]

_UNSET = object()


@dataclass
class Binding:
    """A name -> factory association"""
    name: str
    factory: Optional[Factory]
    singleton: bool = False
    instance: Any = _UNSET

    @property
    def instantiated(self) -> bool:
        return self.instance is not _UNSET


class ServiceContainer:
    """
    Laravel-style service container

    Factories receive the container and are called lazily. Singleton
    bindings call their factory at most once per container; other bindings
    call it on every resolution.

    A factory must not resolve its own name while it is being built: there
    is no cycle detection for factories, only for aliases.

    Example:
        container = ServiceContainer()
        container.singleton('cache', lambda c: {})
        container.alias('Cache', 'cache')
        assert container.resolve('Cache') is container.resolve('cache')
    """

    def __init__(self):
        self.bindings: Dict[str, Binding] = {}
        self.aliases: Dict[str, str] = {}
        self._lock = threading.RLock()

    # =========================================================================
    # Registration
    # =========================================================================

    def bind(self, name: str, factory: Factory, singleton: bool = False) -> None:
        """Register a factory binding (called every time unless singleton)"""
        if not callable(factory):
            raise TypeError(f"Factory for [{name}] must be callable")

        with self._lock:
            # A concrete binding takes precedence over an alias of the same name
            self.aliases.pop(name, None)
            self.bindings[name] = Binding(name=name, factory=factory, singleton=singleton)

    def singleton(self, name: str, factory: Factory) -> None:
        """Register a shared binding; the factory runs on first resolution"""
        self.bind(name, factory, singleton=True)

    def instance(self, name: str, value: Any) -> Any:
        """Register an already built value as a shared binding"""
        with self._lock:
            self.aliases.pop(name, None)
            self.bindings[name] = Binding(name=name, factory=None, singleton=True, instance=value)
        return value

    def alias(self, alias: str, canonical: str) -> None:
        """
        Alias a name to another name

        Aliases may point at other aliases; the chain is followed on
        resolution and must end at a real binding.
        """
        if alias == canonical:
            raise ResolutionError(f"[{alias}] is aliased to itself.", key=alias)

        with self._lock:
            self.aliases[alias] = canonical

    # =========================================================================
    # Resolution
    # =========================================================================

    def get_alias(self, name: str) -> str:
        """
        Follow the alias chain of a name to its canonical name

        Raises:
            ResolutionError: If the chain loops
        """
        seen = [name]
        while name in self.aliases:
            name = self.aliases[name]
            if name in seen:
                cycle = ' -> '.join(seen + [name])
                raise ResolutionError(f"Circular alias detected: {cycle}", key=seen[0])
            seen.append(name)
        return name

    def resolve(self, name: str) -> Any:
        """
        Resolve a binding from the container

        Raises:
            ResolutionError: If the name (or the end of its alias chain) is not bound
        """
        canonical = self.get_alias(name)
        binding = self.bindings.get(canonical)

        if binding is None:
            if canonical != name:
                raise ResolutionError(
                    f"Alias [{name}] points to [{canonical}], which is not bound in the container",
                    key=name
                )
            raise ResolutionError(f"Binding [{name}] not found in container", key=name)

        if not binding.singleton:
            return binding.factory(self)

        if binding.instantiated:
            return binding.instance

        with self._lock:
            # Another resolver may have finished while we waited on the lock
            if not binding.instantiated:
                instance = binding.factory(self)
                # The binding may have been replaced while the factory ran
                if self.bindings.get(canonical) is binding:
                    binding.instance = instance
                return instance
            return binding.instance

    make = resolve

    def has(self, name: str) -> bool:
        """Check if a name (or alias) resolves to a binding"""
        try:
            return self.get_alias(name) in self.bindings
        except ResolutionError:
            return False

    bound = has

    def resolved(self, name: str) -> bool:
        """Check if a singleton binding has already been instantiated"""
        binding = self.bindings.get(self.get_alias(name))
        return bool(binding and binding.singleton and binding.instantiated)

    def is_shared(self, name: str) -> bool:
        """Check if a binding is a singleton"""
        binding = self.bindings.get(self.get_alias(name))
        return bool(binding and binding.singleton)

    # =========================================================================
    # Removal
    # =========================================================================

    def forget(self, name: str) -> None:
        """Remove a binding and every alias that points directly at it"""
        with self._lock:
            self.bindings.pop(name, None)
            self.aliases.pop(name, None)
            for alias, target in list(self.aliases.items()):
                if target == name:
                    del self.aliases[alias]

    def forget_instance(self, name: str) -> None:
        """Drop the cached instance of a singleton so the factory runs again"""
        with self._lock:
            binding = self.bindings.get(self.get_alias(name))
            if binding and binding.factory is not None:
                binding.instance = _UNSET

    def flush(self) -> None:
        """Remove every binding and alias"""
        with self._lock:
            self.bindings.clear()
            self.aliases.clear()

    # =========================================================================
    # Introspection
    # =========================================================================

    def get_bindings(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all container bindings
        """
        result = {}
        for name, binding in self.bindings.items():
            result[name] = {
                'type': 'singleton' if binding.singleton else 'factory',
                'instantiated': binding.instantiated if binding.singleton else None,
                'aliases': self.get_aliases_for(name),
            }
        return result

    def get_aliases_for(self, name: str) -> List[str]:
        """Get every alias whose chain ends at the given name"""
        aliases = []
        for alias in self.aliases:
            try:
                if self.get_alias(alias) == name:
                    aliases.append(alias)
            except ResolutionError:
                continue
        return sorted(aliases)

    def list_bindings(self) -> str:
        """
        Get a formatted list of all container bindings
        """
        bindings = self.get_bindings()

        if not bindings:
            return "No bindings registered in container."

        singletons = []
        factories = []

        for key, info in bindings.items():
            aliases = f" (aliases: {', '.join(info['aliases'])})" if info['aliases'] else ''
            if info['type'] == 'singleton':
                status = '✓ instantiated' if info['instantiated'] else '○ lazy'
                singletons.append(f"  {key:<30} [{status}]{aliases}")
            else:
                factories.append(f"  {key:<30} [new instance each call]{aliases}")

        output = []

        if singletons:
            output.append("Singletons:")
            output.extend(sorted(singletons))

        if factories:
            if output:
                output.append("")
            output.append("Factories (bind):")
            output.extend(sorted(factories))

        return "\n".join(output)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __repr__(self) -> str:
        return f"<ServiceContainer ({len(self.bindings)} bindings, {len(self.aliases)} aliases)>"
