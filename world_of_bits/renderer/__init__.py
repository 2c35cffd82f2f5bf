"""Rendering subpackage.

Turns immutable ``State`` snapshots into images of the visible window. The
renderer focuses on:

* A fixed, player-centred square grid (north at the top).
* Deterministic token colouring by value, so equal tokens look alike.
* Dimming of cells outside the interact radius.

See :mod:`world_of_bits.renderer.texture` for the drawing routines.
"""
