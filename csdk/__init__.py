"""
CSDK - Creature SDK

A small framework for turn-based creature-battling games:
- Extensible entities (creatures, effects, states, skills, items)
- Element type advantages
- A scene-based game loop
- Cyclic serialization: save and reload graphs of creatures whose
  effects reference each other, keeping every reference intact
"""

__version__ = "0.1.0"
