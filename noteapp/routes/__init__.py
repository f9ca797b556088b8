"""
Notes Backend — API Routes Package
===================================

What:  HTTP route handlers. Each module handles one resource.

Route Inventory:
    - notes.py:   GET/POST /api/notes, GET/PUT/DELETE /api/notes/{id}
    - blogs.py:   GET/POST /api/blogs, GET/PUT/DELETE /api/blogs/{id}
    - users.py:   GET/POST /api/users, GET/DELETE /api/users/{id},
                  PUT /api/users/{username}
    - login.py:   POST /api/login
    - authors.py: GET /api/authors
    - health.py:  GET /health

Routes stay thin: they pull values out of the request, call a service and
pick the status code. Errors are raised, never caught here.
"""
