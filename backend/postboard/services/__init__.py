# Services package init
"""
Postboard Backend — Services Layer
====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService: post CRUD, identifier parsing, error translation
"""
