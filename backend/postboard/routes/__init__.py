# Routes package init
"""
Postboard Backend — API Routes Package
========================================

Route Inventory:
    - posts.py:   GET    /api/posts          (list all posts)
                  POST   /api/posts          (create a post)
                  GET    /api/posts/{id}     (fetch one post)
                  PUT    /api/posts/{id}     (replace one post)
                  DELETE /api/posts/{id}     (delete one post)
    - health.py:  GET    /health             (service health check)

Routes handle HTTP concerns only and delegate to services.
"""
