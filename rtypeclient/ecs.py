"""Entity-component-system core: entities, component stores and systems."""

from __future__ import annotations

import logging
from collections import deque

logger = logging.getLogger(__name__)

MAX_ENTITIES = 5000

Entity = int
Signature = int


class EntityLimitError(RuntimeError):
    """Raised when no more entities can be created."""


class EntityManager:
    """Hands out entity ids and keeps their component signatures."""

    def __init__(self, max_entities: int = MAX_ENTITIES) -> None:
        self.max_entities = max_entities
        self._available: deque[Entity] = deque(range(max_entities))
        self._signatures: list[Signature] = [0] * max_entities
        self.living_count = 0

    def _in_range(self, entity: Entity) -> bool:
        return 0 <= entity < self.max_entities

    def _check(self, entity: Entity) -> None:
        if not self._in_range(entity):
            raise IndexError("Entity out of range.")

    def create_entity(self) -> Entity:
        if self.living_count >= self.max_entities:
            raise EntityLimitError(
                "Maximum entity limit reached, cannot create more entities."
            )
        entity = self._available.popleft()
        self.living_count += 1
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        if not self._in_range(entity):
            logger.warning("Attempt to destroy entity out of range: %s", entity)
            return
        self._signatures[entity] = 0
        self._available.append(entity)
        self.living_count -= 1

    def set_signature(self, entity: Entity, signature: Signature) -> None:
        self._check(entity)
        self._signatures[entity] = signature

    def get_signature(self, entity: Entity) -> Signature:
        self._check(entity)
        return self._signatures[entity]


class ComponentManager:
    """Stores components per type and per entity."""

    def __init__(self) -> None:
        self._type_ids: dict[type, int] = {}
        self._stores: dict[type, dict[Entity, object]] = {}

    def register_component(self, component_type: type) -> int:
        if component_type in self._type_ids:
            raise ValueError(
                f"Component type {component_type.__name__} registered more than once."
            )
        type_id = len(self._type_ids)
        self._type_ids[component_type] = type_id
        self._stores[component_type] = {}
        return type_id

    def get_component_type(self, component_type: type) -> int:
        try:
            return self._type_ids[component_type]
        except KeyError:
            raise ValueError(
                f"Component type {component_type.__name__} is not registered."
            ) from None

    def _store(self, component_type: type) -> dict[Entity, object]:
        try:
            return self._stores[component_type]
        except KeyError:
            raise ValueError(
                f"Component type {component_type.__name__} is not registered."
            ) from None

    def add_component(self, entity: Entity, component: object) -> None:
        store = self._store(type(component))
        if entity in store:
            raise ValueError("Component added to same entity more than once.")
        store[entity] = component

    def remove_component(self, entity: Entity, component_type: type) -> None:
        store = self._store(component_type)
        if entity not in store:
            raise KeyError(f"Entity {entity} has no {component_type.__name__}.")
        del store[entity]

    def get_component(self, entity: Entity, component_type: type):
        store = self._store(component_type)
        try:
            return store[entity]
        except KeyError:
            raise KeyError(
                f"Entity {entity} has no {component_type.__name__}."
            ) from None

    def has_component(self, entity: Entity, component_type: type) -> bool:
        store = self._stores.get(component_type)
        return store is not None and entity in store

    def entity_destroyed(self, entity: Entity) -> None:
        for store in self._stores.values():
            store.pop(entity, None)


class System:
    """Base class for systems; holds the entities whose signature matches."""

    def __init__(self, coordinator: Coordinator | None = None) -> None:
        self.coordinator = coordinator
        self.entities: set[Entity] = set()

    def on_entity_destroyed(self, entity: Entity) -> None:
        """Hook called when an entity leaves this system; does nothing by default."""


class SystemManager:
    """Keeps systems and their signatures, and routes entities to them."""

    def __init__(self) -> None:
        self._systems: dict[type, System] = {}
        self._signatures: dict[type, Signature] = {}

    def register_system(self, system: System) -> System:
        system_type = type(system)
        if system_type in self._systems:
            raise ValueError(
                f"System {system_type.__name__} registered more than once."
            )
        self._systems[system_type] = system
        return system

    def set_signature(self, system_type: type, signature: Signature) -> None:
        if system_type not in self._systems:
            raise ValueError(f"System {system_type.__name__} used before registered.")
        self._signatures[system_type] = signature

    def entity_destroyed(self, entity: Entity) -> None:
        for system in self._systems.values():
            system.entities.discard(entity)
            system.on_entity_destroyed(entity)

    def entity_signature_changed(self, entity: Entity, signature: Signature) -> None:
        for system_type, system in self._systems.items():
            system_signature = self._signatures.get(system_type, 0)
            if signature & system_signature == system_signature:
                system.entities.add(entity)
            else:
                system.entities.discard(entity)
                system.on_entity_destroyed(entity)


class Coordinator:
    """Single entry point tying entities, components and systems together."""

    def __init__(self, max_entities: int = MAX_ENTITIES) -> None:
        self.entity_manager = EntityManager(max_entities)
        self.component_manager = ComponentManager()
        self.system_manager = SystemManager()

    def create_entity(self) -> Entity:
        return self.entity_manager.create_entity()

    def destroy_entity(self, entity: Entity) -> None:
        self.entity_manager.destroy_entity(entity)
        self.component_manager.entity_destroyed(entity)
        self.system_manager.entity_destroyed(entity)

    def register_component(self, component_type: type) -> int:
        return self.component_manager.register_component(component_type)

    def get_component_type(self, component_type: type) -> int:
        return self.component_manager.get_component_type(component_type)

    def add_component(self, entity: Entity, component: object) -> None:
        self.component_manager.add_component(entity, component)
        bit = 1 << self.component_manager.get_component_type(type(component))
        signature = self.entity_manager.get_signature(entity) | bit
        self.entity_manager.set_signature(entity, signature)
        self.system_manager.entity_signature_changed(entity, signature)

    def remove_component(self, entity: Entity, component_type: type) -> None:
        self.component_manager.remove_component(entity, component_type)
        bit = 1 << self.component_manager.get_component_type(component_type)
        signature = self.entity_manager.get_signature(entity) & ~bit
        self.entity_manager.set_signature(entity, signature)
        self.system_manager.entity_signature_changed(entity, signature)

    def get_component(self, entity: Entity, component_type: type):
        return self.component_manager.get_component(entity, component_type)

    def has_component(self, entity: Entity, component_type: type) -> bool:
        return self.component_manager.has_component(entity, component_type)

    def register_system(self, system_type: type) -> System:
        return self.system_manager.register_system(system_type(self))

    def set_system_signature(self, system_type: type, *args: type) -> None:
        """Require the given component types for entities of a system."""
        signature = 0
        for component_type in args:
            signature |= 1 << self.get_component_type(component_type)
        self.system_manager.set_signature(system_type, signature)