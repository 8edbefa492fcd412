"""
Games - Example games built on the engine.

Each game lives in its own subpackage with its card library and rules.
"""
