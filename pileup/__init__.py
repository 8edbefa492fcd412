"""
Pileup - Card Table State Engine

An in-memory engine for the state of a card game, independent of how that
state is rendered. The engine provides:
- A registry of card types and card-type groups
- Card instances with per-session ids
- Named, ordered piles and pile groups
- Stacking relationships between cards (a forest of stacks)
- Move operations that keep piles and stacks consistent
"""

__version__ = "0.1.0"
