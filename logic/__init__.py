"""logic — Game systems package.

Top-level modules
-----------------
tick            — per-frame system orchestrator (+ input system)
movement        — current tile + tile collision resolver
mining          — mining state machine (guard, drill steps, conversion)
player          — player spawn + PlayerHandle facade
input_manager   — raw input → intent mapping
viewport        — camera offset and visible tile window
"""
