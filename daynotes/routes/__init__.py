# Routes package init
"""
DayNotes Backend — API Routes Package
=======================================

Route Inventory:
    - notes.py:     GET/POST /api/notes, PUT/DELETE /api/notes/{id}
    - earnings.py:  POST /api/daily-earnings
                    GET  /api/daily-earnings/{user_id}/{year}/{month}
                    GET  /api/monthly-summary/{user_id}/{year}/{month}
    - auth.py:      POST /login
    - health.py:    GET  /health

Routes stay thin: extract input, call a service, return its response model.
"""
