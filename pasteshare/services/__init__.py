# Services package init
"""
PasteShare Backend - Services Layer
====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PasteService: the paste repository (create, get, list, update,
      delete, recent) over the `pastes` table

Services take the request's AsyncSession as an argument and hold no state,
so they can be unit-tested with a mocked session.
"""
