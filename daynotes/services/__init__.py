# Services package init
"""
DayNotes Backend — Services Layer
===================================

Service Inventory:
    - periods: calendar-month and 21st-to-20th payroll date windows (pure)
    - NoteService: list, save/clear, owner-only update and delete
    - EarningsService: daily upsert, month listing, cycle summary
    - AuthService: username/password verification

Services receive the request's AsyncSession as an argument and hold no state.
"""
