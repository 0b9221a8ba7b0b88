"""LifeQuest domain layer: entities, aggregates and value objects."""
