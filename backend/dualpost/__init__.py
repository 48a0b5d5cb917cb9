"""
DualPost Backend — Application Package Initializer
===================================================

What: Marks the `dualpost` directory as a Python package.
Why:  Enables module imports like `from dualpost.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    One post resource, two storage engines, one generic router:

    ┌─────────────────────────────────────┐
    │    Routes (/api/posts/{backend})    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     PostStore (abstract contract)   │  ← create / list / get / update / delete
    ├──────────────────┬──────────────────┤
    │ PostgresPostStore│  MongoPostStore  │  ← one adapter per backend
    ├──────────────────┼──────────────────┤
    │ SQLAlchemy async │  Motor client    │  ← created once in the lifespan
    └──────────────────┴──────────────────┘

    The router never knows which engine it talks to. Each adapter is mounted
    under its own prefix (`pg`, `mongo`) and resolved per request through
    FastAPI's dependency injection.
"""

__version__ = "1.0.0"
