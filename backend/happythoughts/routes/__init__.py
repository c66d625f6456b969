# Routes package init
"""
Happy Thoughts API — Routes Package
====================================

Route Inventory:
    - thoughts.py:  /thoughts            list, detail, create, update, delete, like
    - dogs.py:      /dogs                same operations, plus GET /dogs/name/{name}
    - users.py:     /users               register, login, me
    - health.py:    GET /, GET /health   endpoint listing and health check

Routes stay thin: read the request, call one service method, wrap the result
in an Envelope. Failures are raised as exceptions and rendered in main.py.
"""
