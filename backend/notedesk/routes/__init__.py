# Routes package init
"""
NoteDesk Backend: API Routes Package
=======================================

Route Inventory:
    - notes.py:   POST   /api/notes         (create)
                  GET    /api/notes         (list, ?search=&category=)
                  GET    /api/notes/{id}    (detail)
                  PUT    /api/notes/{id}    (full replace)
                  DELETE /api/notes/{id}    (delete)
    - health.py:  GET    /health            (service health check)

Routes stay thin: extract parameters, validate writes, call NoteStore,
return the response model. Errors propagate to the handlers in main.py.
"""
