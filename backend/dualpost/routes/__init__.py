# Routes package init
"""
DualPost Backend — API Routes Package
======================================

Route Inventory:
    - posts.py:   build_posts_router(), mounted twice:
                  /api/posts/pg       (PostgresPostStore)
                  /api/posts/mongo    (MongoPostStore)
                  each with POST, GET, GET /{id}, PUT /{id}, DELETE /{id}
    - health.py:  GET /health         (store reachability)
    - pages.py:   GET /               (index.html)

Design Principle:
    Routes are THIN: resolve the store, make one call, map the result.
    Persistence belongs in the stores.
"""
