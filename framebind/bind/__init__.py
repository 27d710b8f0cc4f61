"""
Stack multiple tables into a single Frame.

Public API:
    bind_rows(*inputs, id_column, column_mode, strings_as_factors, max_workers) -> Frame
        Binds rows of heterogeneous tables, matching columns by name.
    rbind_list(*tables) / rbind_all(tables)
        Variadic and sequence aliases of bind_rows.

Internal modules (not exported):
    _orchestrator: Main bind orchestration (4-phase pipeline)
    _validation: Input normalization and table-likeness checks
    _columns: Column name union and column modes
    _resolver: Per-column type promotion fold
    _reconcile: Factor level, timezone and list-column attribute merging
    _collector: Per-column value conversion and NA filling

Architecture:
    bind_rows() orchestrates a 4-phase process:
    1. Validation: Adapt inputs to Frames, skip nulls (_validation.py)
    2. Preparation: Compute output column names (_columns.py)
    3. Construction: Resolve each column's type and collect its values
       (_resolver.py, _reconcile.py, _collector.py)
    4. Finalization: Assemble the Frame, emit warnings (_orchestrator.py)
"""

from framebind.bind._orchestrator import bind_rows, rbind_all, rbind_list

__all__ = ["bind_rows", "rbind_all", "rbind_list"]
