# Routes package init
"""
Portfolio API — API Routes Package
====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - articles.py:  GET  /articles, GET /articles/{id}
    - projects.py:  GET  /projects, GET /projects/{id}
    - search.py:    GET  /search?query=Q
    - contact.py:   POST /contact
    - health.py:    GET  /health
    - site.py:      GET  / and the catch-all (SPA fallback / 404 JSON)

Routes are thin: they extract request data, call a service, and return the
result. Errors travel as exceptions to the global handlers in main.py.
"""
