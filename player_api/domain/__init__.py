"""Domain layer (pure logic).

- Keep player rules and calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (time passed in as arguments if needed).
"""
