"""
Services Layer

Business logic for schedules and attendees:
- Accept domain inputs (IDs, user ids, sessions)
- Return domain outputs (models, dataclasses, pages)
- Raise TripPlannerError subclasses; never HTTP exceptions
- Own the transaction boundary of every mutating operation
"""
