# Services package init
"""
DualPost Backend — Storage Services Layer
==========================================

What:  Storage adapters sitting between routes (HTTP) and the two databases.
Why:   Routes handle HTTP; stores handle persistence. The router is written
       once against the PostStore contract and mounted once per store.

Service Inventory:
    - PostStore (abstract): The five-operation storage contract
    - PostgresPostStore: Relational adapter (SQLAlchemy async + asyncpg)
    - MongoPostStore: Document adapter (Motor)
"""
