from dataclasses import dataclass

import pytest

from rtypeclient.ecs import (
    ComponentManager,
    Coordinator,
    EntityLimitError,
    EntityManager,
    System,
    SystemManager,
)


@dataclass
class Position:
    x: float = 0.0


@dataclass
class Speed:
    dx: float = 0.0


class Recording(System):
    def __init__(self, coordinator=None):
        super().__init__(coordinator)
        self.left = []

    def on_entity_destroyed(self, entity):
        self.left.append(entity)


def make_coordinator():
    coordinator = Coordinator(max_entities=8)
    coordinator.register_component(Position)
    coordinator.register_component(Speed)
    system = coordinator.register_system(Recording)
    coordinator.set_system_signature(Recording, Position, Speed)
    return coordinator, system


def test_entities_created_in_order():
    manager = EntityManager(max_entities=3)
    assert [manager.create_entity() for _ in range(3)] == list(range(3))
    assert manager.living_count == 3


def test_entity_limit_raises():
    manager = EntityManager(max_entities=2)
    manager.create_entity()
    manager.create_entity()
    with pytest.raises(EntityLimitError):
        manager.create_entity()


def test_destroyed_id_is_reused_last():
    manager = EntityManager(max_entities=3)
    ids = [manager.create_entity() for _ in range(3)]
    manager.destroy_entity(ids[1])
    assert manager.create_entity() == ids[1]


def test_destroy_out_of_range_is_ignored():
    manager = EntityManager(max_entities=3)
    manager.create_entity()
    manager.destroy_entity(10)
    manager.destroy_entity(-1)
    assert manager.living_count == 1


def test_signature_round_trip_and_reset():
    manager = EntityManager(max_entities=3)
    entity = manager.create_entity()
    manager.set_signature(entity, 0b101)
    assert manager.get_signature(entity) == 0b101
    manager.destroy_entity(entity)
    assert manager.get_signature(entity) == 0


def test_signature_out_of_range_raises():
    manager = EntityManager(max_entities=3)
    with pytest.raises(IndexError):
        manager.get_signature(3)
    with pytest.raises(IndexError):
        manager.set_signature(-1, 1)


def test_component_type_ids_are_sequential():
    components = ComponentManager()
    first = components.register_component(Position)
    second = components.register_component(Speed)
    assert components.get_component_type(Position) == first
    assert components.get_component_type(Speed) == first + 1 == second


def test_register_component_twice_raises():
    components = ComponentManager()
    components.register_component(Position)
    with pytest.raises(ValueError):
        components.register_component(Position)


def test_unregistered_component_raises():
    components = ComponentManager()
    with pytest.raises(ValueError):
        components.add_component(0, Position())
    with pytest.raises(ValueError):
        components.get_component_type(Speed)
    assert not components.has_component(0, Position)


def test_component_add_get_remove():
    components = ComponentManager()
    components.register_component(Position)
    position = Position(3.0)
    components.add_component(4, position)
    assert components.get_component(4, Position) is position
    assert components.has_component(4, Position)
    components.remove_component(4, Position)
    assert not components.has_component(4, Position)
    with pytest.raises(KeyError):
        components.get_component(4, Position)
    with pytest.raises(KeyError):
        components.remove_component(4, Position)


def test_duplicate_component_raises():
    components = ComponentManager()
    components.register_component(Position)
    components.add_component(1, Position())
    with pytest.raises(ValueError):
        components.add_component(1, Position())


def test_component_entity_destroyed_clears_all_stores():
    components = ComponentManager()
    components.register_component(Position)
    components.register_component(Speed)
    components.add_component(2, Position())
    components.add_component(2, Speed())
    components.entity_destroyed(2)
    assert not components.has_component(2, Position)
    assert not components.has_component(2, Speed)


def test_system_manager_duplicate_and_unknown_signature():
    systems = SystemManager()
    systems.register_system(Recording())
    with pytest.raises(ValueError):
        systems.register_system(Recording())
    with pytest.raises(ValueError):
        systems.set_signature(System, 1)


def test_entity_joins_system_when_signature_matches():
    coordinator, system = make_coordinator()
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Position())
    assert entity not in system.entities
    coordinator.add_component(entity, Speed())
    assert entity in system.entities
    assert system.coordinator is coordinator


def test_removing_component_leaves_system():
    coordinator, system = make_coordinator()
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Position())
    coordinator.add_component(entity, Speed())
    coordinator.remove_component(entity, Speed)
    assert entity not in system.entities
    assert entity in system.left
    assert coordinator.has_component(entity, Position)


def test_destroy_entity_clears_everything():
    coordinator, system = make_coordinator()
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Position())
    coordinator.add_component(entity, Speed())
    coordinator.destroy_entity(entity)
    assert entity not in system.entities
    assert not coordinator.has_component(entity, Position)
    assert coordinator.entity_manager.living_count == 0


def test_get_component_returns_same_object():
    coordinator, _ = make_coordinator()
    entity = coordinator.create_entity()
    coordinator.add_component(entity, Position(1.0))
    coordinator.get_component(entity, Position).x = 9.0
    assert coordinator.get_component(entity, Position).x == 9.0