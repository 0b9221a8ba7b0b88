"""
LifeQuest: a "gamify your life" progression engine.

Players create a character, complete real-life tasks framed as quests, and
earn experience, levels, stat growth and achievements. The engine keeps an
in-memory model (players, quests, achievements) behind a single
``ProgressionStore``.
"""

__version__ = "1.0.0"
