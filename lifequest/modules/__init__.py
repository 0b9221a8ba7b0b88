"""LifeQuest feature modules."""
