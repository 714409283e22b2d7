"""
OPL Data File Package (opldat)

Builds data files for CPLEX OPL models from typed elements:
scalar and float constants, sets, tuples and indexed arrays.

ARCHITECTURAL GUARANTEE:
------------------------
The element and document model contains ZERO knowledge of:
    - Output syntax and layout
    - File handling
    - Solver-side semantics

Rendering happens in opldat.backends.
"""

__version__ = "0.1.0"
