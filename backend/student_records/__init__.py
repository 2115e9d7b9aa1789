"""Student records backend.

A FastAPI service for signing in and for managing student and user
records stored in SQL through SQLModel. Run it with
`python -m student_records`, or point an ASGI server at
`student_records.main:app`.
"""
