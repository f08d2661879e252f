# Services package init
"""
NoteDesk Backend: Services Layer
===================================

Service Inventory:
    - validation.validate_note: Pure pre-write payload check
    - note_store.NoteStore:     Parameter-bound statements against the notes table
"""
