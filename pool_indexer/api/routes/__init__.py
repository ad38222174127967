"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never mutate aggregates directly (ingest goes through EventPipeline)
"""
