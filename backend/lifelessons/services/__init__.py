"""
Digital Life Lessons API — Services Layer
===========================================

What:  Business logic between routes (HTTP) and MongoDB (persistence).
How:   Each service is a stateless singleton. The database handle is passed
       into every call, so tests hand in a fake database directly.

Service Inventory:
    - UserService:     user listing, status lookup, creation
    - LessonService:   lesson CRUD, recommendations, like toggle
    - FavoriteService: favorite add/remove + favoritesCount upkeep
    - ReportService:   one-per-reporter lesson reports
    - CommentService:  append-only comment log
"""
