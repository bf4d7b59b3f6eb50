"""
Digital Life Lessons API — Routes Package
===========================================

Route Inventory:
    - users.py:      GET /users, GET /users/{email}/status, POST /users
    - lessons.py:    GET/POST /lessons, GET /lessons/{id}, PATCH /lessons/{id}/like
    - favorites.py:  POST /favorites, DELETE /favorites
    - reports.py:    POST /reports
    - comments.py:   GET /comments, POST /comments
    - health.py:     GET /, GET /health

Routes are thin: they read path/query/body values, call a service with the
injected database handle, and return what the service returns.
"""
