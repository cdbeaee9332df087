"""
Primitives (sphere, quadrilateral, triangle), surfaces, and the bounding
volume hierarchy built over them.

Submodules are imported directly (``from geometry.bvh import BVH``); this
package does not re-export them because materials depend on
``geometry.hittable`` while surfaces depend on materials.
"""
