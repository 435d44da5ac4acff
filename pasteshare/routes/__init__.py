# Routes package init
"""
PasteShare Backend - API Routes Package
========================================

Route Inventory:
    - pastes.py:  POST   /api/pastes                 (create)
                  GET    /api/pastes                 (list / search, 12 per page)
                  GET    /api/pastes/recent          (six newest public pastes)
                  GET    /api/pastes/{id}            (single paste)
                  PUT    /api/pastes/{id}            (update)
                  DELETE /api/pastes/{id}            (delete)
                  GET    /api/pastes/{id}/download   (content as a file)
                  GET    /api/languages              (language table)
    - health.py:  GET    /health                     (service health check)

Routes stay thin: parse the request, call PasteService, set headers.
"""
