"""
handlers/ - Presentation Layer
================================
FastAPI routes. Each handler parses the HTTP request, delegates to the
appropriate Service, and shapes the JSON response (or the error envelope).
No business logic lives here.
"""
