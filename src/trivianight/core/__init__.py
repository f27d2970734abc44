"""Pure scoring logic.

Every function here takes explicit Game/roster values and returns a derived
value or a new Game. Nothing in this package touches storage.
"""
